"""Pytest configuration and shared fixtures for the BOM graph engine."""

import os
from decimal import Decimal

import pytest

from bomgraph.domain.bom import Association, BOMGraph
from bomgraph.domain.catalog import Catalog, Product
from bomgraph.domain.shared.value_objects import ProductType


def pytest_configure():
    # Keep layout spacing and logging independent of a developer's .env
    os.environ.setdefault("BOMGRAPH_ENV", "dev")
    os.environ.setdefault("BOMGRAPH_H_SPACING", "200")
    os.environ.setdefault("BOMGRAPH_V_SPACING", "120")


def _product(product_id, type_id=ProductType.RAW_MATERIAL):
    return Product(
        id=product_id,
        name=product_id.title(),
        type_id=type_id,
        unit_id="PCE",
    )


@pytest.fixture
def make_catalog():
    """Catalog with one raw-material product per given id."""
    def factory(*product_ids):
        return Catalog(products=[_product(pid) for pid in product_ids])
    return factory


@pytest.fixture
def make_edge():
    """Bare Association record, bypassing the aggregate (for corrupted data)."""
    def factory(parent_id, child_id, quantity="1", scrap_factor="0", sequence_num=None):
        return Association(
            parent_id=parent_id,
            child_id=child_id,
            quantity=Decimal(str(quantity)),
            scrap_factor=Decimal(str(scrap_factor)),
            sequence_num=sequence_num,
        )
    return factory


@pytest.fixture
def abcd_catalog(make_catalog):
    return make_catalog("A", "B", "C", "D", "X", "Y")


@pytest.fixture
def abcd_graph(abcd_catalog):
    return BOMGraph(abcd_catalog)


@pytest.fixture
def cake_graph():
    """CAKE uses FLOUR (500, scrap 5) and EGG (4, scrap 10)."""
    catalog = Catalog(products=[
        _product("CAKE", ProductType.FINISHED_GOOD),
        _product("FLOUR"),
        _product("EGG"),
    ])
    graph = BOMGraph(catalog)
    assert graph.propose_association("CAKE", "FLOUR", 500, 5).ok
    assert graph.propose_association("CAKE", "EGG", 4, 10).ok
    graph.clear_domain_events()
    return graph
