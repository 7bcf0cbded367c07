"""Tests for the application services: render, re-root, graft, validate."""

from decimal import Decimal

import pytest

from bomgraph.application.bom_service import graft_product, render_graph, reroot, validate_graph
from bomgraph.domain.bom import BOMGraph, LayoutSettings, build_forest, collect_descendant_edges
from bomgraph.domain.catalog import Catalog, Product
from bomgraph.domain.shared.value_objects import Position
from bomgraph.infrastructure.seed import build_demo_associations, build_demo_graph
from bomgraph.presentation.graph import serialize_tree


@pytest.fixture
def demo_graph():
    return build_demo_graph()


@pytest.fixture
def empty_demo_graph(demo_graph):
    return BOMGraph(demo_graph.catalog)


class TestRender:

    def test_whole_graph(self, demo_graph):
        view = render_graph(demo_graph, settings=LayoutSettings(200, 120))

        assert len(view.edges) == 12
        assert {node.id for node in view.nodes} == set(demo_graph.product_ids_in_use())
        assert view.issues == []

    def test_rooted_render(self, demo_graph):
        view = render_graph(demo_graph, root_id="WIP_CAKE_BASE", settings=LayoutSettings(200, 120))

        assert [node.id for node in view.nodes] == [
            "WIP_CAKE_BASE", "RAW_FLOUR", "RAW_EGG", "RAW_SUGAR", "RAW_MILK",
        ]
        assert view.node("WIP_CAKE_BASE").position.x == 300
        assert view.node("RAW_MILK").position.y == 120


class TestReroot:

    def test_inherits_whole_recipe(self, demo_graph):
        working = reroot(demo_graph, "CHOC_CAKE_STD")

        keys = {a.key for a in working.list_all_associations()}
        assert len(keys) == 8
        assert ("CHOC_CAKE_STD", "WIP_CAKE_BASE") in keys
        assert ("WIP_CREAM_FILL", "RAW_SUGAR") in keys
        assert ("CHOC_CAKE_MINI", "WIP_CAKE_BASE") not in keys
        assert working.domain_events == []

    def test_working_copy_is_independent(self, demo_graph):
        working = reroot(demo_graph, "CHOC_CAKE_STD")
        working.update_association("CHOC_CAKE_STD", "WIP_CAKE_BASE", quantity=3)
        working.remove_association("WIP_CAKE_BASE", "RAW_EGG")

        source = demo_graph.find_association("CHOC_CAKE_STD", "WIP_CAKE_BASE")
        assert source.quantity == Decimal("1")
        assert demo_graph.find_association("WIP_CAKE_BASE", "RAW_EGG") is not None

    def test_leaf_root(self, demo_graph):
        assert len(reroot(demo_graph, "RAW_FLOUR")) == 0


class TestGraft:

    def test_child_recipe_is_inherited(self, empty_demo_graph):
        result = graft_product(
            empty_demo_graph, build_demo_associations(), "CHOC_CAKE_DLX", "WIP_CAKE_BASE", 1, 10,
        )

        assert result.ok
        assert result.link.association.key == ("CHOC_CAKE_DLX", "WIP_CAKE_BASE")
        assert [a.child_id for a in result.inherited] == [
            "RAW_FLOUR", "RAW_EGG", "RAW_SUGAR", "RAW_MILK",
        ]
        assert result.rejected == []
        assert len(empty_demo_graph) == 5

    def test_existing_edges_are_kept(self, empty_demo_graph):
        empty_demo_graph.propose_association("WIP_CAKE_BASE", "RAW_FLOUR", 750)
        result = graft_product(
            empty_demo_graph, build_demo_associations(), "CHOC_CAKE_DLX", "WIP_CAKE_BASE", 1,
        )

        assert len(result.inherited) == 3
        assert empty_demo_graph.find_association("WIP_CAKE_BASE", "RAW_FLOUR").quantity == Decimal("750")

    def test_inherited_edges_pass_the_guard(self, empty_demo_graph):
        empty_demo_graph.propose_association("RAW_FLOUR", "CHOC_CAKE_DLX", 1)
        result = graft_product(
            empty_demo_graph, build_demo_associations(), "CHOC_CAKE_DLX", "WIP_CAKE_BASE", 1,
        )

        assert result.ok
        assert [r.code for r in result.rejected] == ["CIRCULAR_REFERENCE"]
        assert len(result.inherited) == 3
        assert empty_demo_graph.find_association("WIP_CAKE_BASE", "RAW_FLOUR") is None

    def test_rejected_link_skips_inheritance(self, demo_graph):
        result = graft_product(
            demo_graph, build_demo_associations(), "RAW_FLOUR", "WIP_CAKE_BASE", 1,
        )

        assert not result.ok
        assert result.link.code == "CIRCULAR_REFERENCE"
        assert result.inherited == []
        assert len(demo_graph) == 12


class TestValidateGraph:

    def test_demo_graph_is_valid(self, demo_graph):
        report = validate_graph(demo_graph)

        assert report == {'associations_count': 12, 'valid': True, 'issues': []}

    def test_reports_corrupted_amounts(self, demo_graph):
        assoc = demo_graph.find_association("WIP_CAKE_BASE", "RAW_EGG")
        assoc.quantity = Decimal("-1")
        assoc.scrap_factor = Decimal("150")

        report = validate_graph(demo_graph)

        assert not report['valid']
        assert [issue['type'] for issue in report['issues']] == [
            'invalid_quantity', 'invalid_scrap_factor',
        ]
        assert report['issues'][0]['item_id'] == "WIP_CAKE_BASE-RAW_EGG"


CHAIN_LENGTH = 1500


@pytest.fixture(scope="module")
def chain_graph():
    """P0 -> P1 -> ... -> P1499, deeper than the interpreter's recursion limit."""
    ids = [f"P{i}" for i in range(CHAIN_LENGTH)]
    catalog = Catalog(products=[
        Product(id=pid, name=pid, type_id="RAW_MATERIAL", unit_id="PCE") for pid in ids
    ])
    graph = BOMGraph(catalog)
    for parent_id, child_id in zip(ids, ids[1:]):
        assert graph.propose_association(parent_id, child_id, 1).ok
    return graph


class TestDeepGraphs:

    def test_collect_descendants(self, chain_graph):
        edges = collect_descendant_edges("P0", chain_graph.list_all_associations())

        assert len(edges) == CHAIN_LENGTH - 1
        assert edges[-1].key == ("P1498", "P1499")

    def test_forest_and_tree_payload(self, chain_graph):
        forest = build_forest(chain_graph.catalog, chain_graph.list_all_associations())

        assert len(forest) == CHAIN_LENGTH
        deepest = forest.occurrences("P1499")[0]
        assert deepest.depth == CHAIN_LENGTH - 1

        node = serialize_tree(forest)[0]
        while node['children']:
            node = node['children'][0]
        assert node['level'] == CHAIN_LENGTH - 1

    def test_render_and_reroot(self, chain_graph):
        view = render_graph(chain_graph, settings=LayoutSettings(200, 120))

        assert len(view.nodes) == CHAIN_LENGTH
        assert view.node("P1499").position == Position(0, (CHAIN_LENGTH - 1) * 120)
        assert view.node("P0").position == Position(0, 0)

        working = reroot(chain_graph, "P1000")
        assert len(working) == CHAIN_LENGTH - 1001
