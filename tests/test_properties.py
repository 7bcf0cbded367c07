"""Property-based tests for the cycle guard, the forest and the layout."""

from hypothesis import given, settings, strategies as st

from bomgraph.domain.bom import (
    BOMGraph,
    LayoutSettings,
    build_forest,
    collect_descendant_edges,
    compute_layout,
    find_cycle,
    would_create_cycle,
)
from bomgraph.domain.catalog import Catalog, Product

PRODUCT_IDS = [f"P{i}" for i in range(8)]
CATALOG = Catalog(products=[
    Product(id=pid, name=pid, type_id="RAW_MATERIAL", unit_id="PCE") for pid in PRODUCT_IDS
])

proposals = st.lists(
    st.tuples(st.sampled_from(PRODUCT_IDS), st.sampled_from(PRODUCT_IDS)),
    max_size=30,
)


def reachable(start, edges):
    """Brute-force reachability over (parent, child) pairs."""
    seen = {start}
    frontier = [start]
    while frontier:
        node = frontier.pop()
        for parent, child in edges:
            if parent == node and child not in seen:
                seen.add(child)
                frontier.append(child)
    return seen


def build_graph(pairs):
    graph = BOMGraph(CATALOG)
    results = [graph.propose_association(parent, child, 1) for parent, child in pairs]
    return graph, results


@given(proposals)
@settings(max_examples=200)
def test_graph_stays_acyclic(pairs):
    graph, _ = build_graph(pairs)
    assert find_cycle(graph.list_all_associations()) is None


@given(proposals)
@settings(max_examples=200)
def test_guard_matches_reachability(pairs):
    graph = BOMGraph(CATALOG)
    for parent, child in pairs:
        existing = [a.key for a in graph.list_all_associations()]
        expected_cycle = parent in reachable(child, existing)
        result = graph.propose_association(parent, child, 1)

        if (parent, child) in existing:
            assert result.code == "DUPLICATE_ASSOCIATION"
        elif expected_cycle:
            assert result.code == "CIRCULAR_REFERENCE"
        else:
            assert result.ok


@given(proposals)
def test_pairs_are_unique(pairs):
    graph, _ = build_graph(pairs)
    keys = [a.key for a in graph.list_all_associations()]
    assert len(keys) == len(set(keys))


@given(proposals)
def test_rejections_leave_graph_unchanged(pairs):
    graph = BOMGraph(CATALOG)
    for parent, child in pairs:
        before = [a.key for a in graph.list_all_associations()]
        result = graph.propose_association(parent, child, 1)
        after = [a.key for a in graph.list_all_associations()]
        assert after == (before + [(parent, child)] if result.ok else before)


@given(proposals, st.sampled_from(PRODUCT_IDS))
def test_subtree_matches_reachable_edges(pairs, root_id):
    graph, _ = build_graph(pairs)
    edges = graph.list_all_associations()
    nodes = reachable(root_id, [a.key for a in edges])

    collected = collect_descendant_edges(root_id, edges)
    keys = [a.key for a in collected]

    assert len(keys) == len(set(keys))
    assert set(keys) == {a.key for a in edges if a.parent_id in nodes}


@given(proposals)
def test_every_edge_appears_in_forest(pairs):
    graph, _ = build_graph(pairs)
    edges = graph.list_all_associations()
    forest = build_forest(CATALOG, edges)

    shown = {node.association.key for node in forest.walk() if node.association}
    assert shown == {a.key for a in edges}
    assert not forest.has_issues


@given(proposals)
def test_layout_width_and_overlap(pairs):
    graph, _ = build_graph(pairs)
    forest = build_forest(CATALOG, graph.list_all_associations())
    layout = compute_layout(forest, LayoutSettings(h_spacing=200, v_spacing=120))

    for node in forest.walk():
        children = forest.children(node)
        offset, width = layout.spans[node.key]
        assert width == max(1, sum(layout.spans[c.key][1] for c in children))
        assert layout.node_positions[node.key].y == node.depth * 120

        child_spans = [layout.spans[c.key] for c in children]
        for (start_a, width_a), (start_b, _) in zip(child_spans, child_spans[1:]):
            assert start_a + width_a <= start_b
        for start, child_width in child_spans:
            assert offset <= start and start + child_width <= offset + width


@given(proposals, st.sampled_from(PRODUCT_IDS))
def test_self_loop_always_rejected(pairs, product_id):
    graph, _ = build_graph(pairs)
    assert would_create_cycle(product_id, product_id, graph.list_all_associations())
