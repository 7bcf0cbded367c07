"""
Demo catalog and BOM data.

Purpose:
- Provide a small bakery catalog (raw materials, semi-finished goods,
  finished cakes) and its recipes for demos and tests.
- Every call builds fresh objects, so independent graphs never share state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from bomgraph.domain.bom import Association, BOMGraph
from bomgraph.domain.catalog import Catalog, Product, UnitOfMeasure
from bomgraph.domain.shared.value_objects import ProductType

logger = logging.getLogger(__name__)

SEED_EFFECTIVE_FROM = datetime(2024, 1, 1, 0, 0, 0)


@dataclass(frozen=True)
class DemoAssocSpec:
    parent_id: str
    child_id: str
    quantity: str
    scrap_factor: str
    sequence_num: int
    routing_work_effort_id: Optional[str] = None


DEMO_UNITS = [
    ("GRM", "Gram"),
    ("PCE", "Piece"),
    ("MLT", "Millilitre"),
]

# (id, name, description, internal name, type, unit, virtual, variant)
DEMO_PRODUCTS = [
    # Raw materials
    ("RAW_FLOUR", "Cake Flour", "Standard Cake Flour", "CAKE_FLOUR", "RAW_MATERIAL", "GRM", False, False),
    ("RAW_EGG", "Fresh Eggs", "Fresh Chicken Eggs", "FRESH_EGG", "RAW_MATERIAL", "PCE", False, False),
    ("RAW_SUGAR", "White Sugar", "Refined White Sugar", "WHITE_SUGAR", "RAW_MATERIAL", "GRM", False, False),
    ("RAW_MILK", "Whole Milk", "Fresh Whole Milk", "WHOLE_MILK", "RAW_MATERIAL", "MLT", False, False),
    ("RAW_CHOC", "Dark Chocolate", "Premium Dark Chocolate", "DARK_CHOCOLATE", "RAW_MATERIAL", "GRM", False, False),
    ("RAW_CREAM", "Whipping Cream", "Fresh Whipping Cream", "WHIPPING_CREAM", "RAW_MATERIAL", "MLT", False, False),
    ("RAW_FRUIT", "Mixed Fruits", "Mixed Berries (Strawberry/Blueberry)", "MIXED_FRUIT", "RAW_MATERIAL", "GRM", False, False),
    # Semi-finished
    ("WIP_CAKE_BASE", "Cake Base", "Standard Cake Base", "CAKE_BASE", "WIP", "PCE", False, False),
    ("WIP_CREAM_FILL", "Cream Filling", "Whipped Cream Filling", "CREAM_FILLING", "WIP", "PCE", False, False),
    ("WIP_CHOC_SAUCE", "Chocolate Sauce", "Chocolate Sauce", "CHOCOLATE_SAUCE", "WIP", "PCE", False, False),
    # Finished goods
    ("CHOC_CAKE_VIRTUAL", "Chocolate Cake", "Chocolate Cake (Virtual Product)", "CHOCOLATE_CAKE", "FINISHED_GOOD", "PCE", True, False),
    ("CHOC_CAKE_STD", "Standard Chocolate Cake", "Standard Chocolate Cake", "STANDARD_CHOC_CAKE", "FINISHED_GOOD", "PCE", False, True),
    ("CHOC_CAKE_DLX", "Deluxe Chocolate Cake", "Deluxe Chocolate Cake", "DELUXE_CHOC_CAKE", "FINISHED_GOOD", "PCE", False, True),
    ("CHOC_CAKE_MINI", "Mini Chocolate Cake", "Mini Chocolate Cake", "MINI_CHOC_CAKE", "FINISHED_GOOD", "PCE", False, True),
]

DEMO_ASSOCIATIONS = [
    # Cake base recipe
    DemoAssocSpec("WIP_CAKE_BASE", "RAW_FLOUR", "500.0", "5", 1),
    DemoAssocSpec("WIP_CAKE_BASE", "RAW_EGG", "4", "10", 2),
    DemoAssocSpec("WIP_CAKE_BASE", "RAW_SUGAR", "200.0", "2", 3),
    DemoAssocSpec("WIP_CAKE_BASE", "RAW_MILK", "250.0", "3", 4),
    # Cream filling recipe
    DemoAssocSpec("WIP_CREAM_FILL", "RAW_CREAM", "500.0", "8", 1),
    DemoAssocSpec("WIP_CREAM_FILL", "RAW_SUGAR", "100.0", "2", 2),
    # Chocolate sauce recipe
    DemoAssocSpec("WIP_CHOC_SAUCE", "RAW_CHOC", "300.0", "5", 1),
    DemoAssocSpec("WIP_CHOC_SAUCE", "RAW_MILK", "100.0", "3", 2),
    # Standard cake
    DemoAssocSpec("CHOC_CAKE_STD", "WIP_CAKE_BASE", "1", "10", 1, "TASK_CAKE_SLICE"),
    DemoAssocSpec("CHOC_CAKE_STD", "WIP_CREAM_FILL", "1", "15", 2, "TASK_CAKE_FILL"),
    # Mini cake
    DemoAssocSpec("CHOC_CAKE_MINI", "WIP_CAKE_BASE", "0.5", "10", 1, "TASK_CAKE_SLICE"),
    DemoAssocSpec("CHOC_CAKE_MINI", "WIP_CREAM_FILL", "0.3", "15", 2, "TASK_CAKE_FILL"),
]


def build_demo_catalog() -> Catalog:
    """Fresh catalog with the demo units and products."""
    units = [UnitOfMeasure(id=unit_id, description=desc) for unit_id, desc in DEMO_UNITS]
    products = [
        Product(
            id=product_id,
            name=name,
            description=description,
            internal_name=internal_name,
            type_id=ProductType(type_id),
            unit_id=unit_id,
            is_virtual=is_virtual,
            is_variant=is_variant,
        )
        for (product_id, name, description, internal_name,
             type_id, unit_id, is_virtual, is_variant) in DEMO_PRODUCTS
    ]
    return Catalog(products=products, units=units)


def build_demo_associations() -> List[Association]:
    """Fresh association records for the demo recipes."""
    return [
        Association(
            parent_id=spec.parent_id,
            child_id=spec.child_id,
            quantity=Decimal(spec.quantity),
            scrap_factor=Decimal(spec.scrap_factor),
            sequence_num=spec.sequence_num,
            effective_from=SEED_EFFECTIVE_FROM,
            routing_work_effort_id=spec.routing_work_effort_id,
        )
        for spec in DEMO_ASSOCIATIONS
    ]


def build_demo_graph(catalog: Optional[Catalog] = None) -> BOMGraph:
    """Demo graph, every association loaded through the cycle guard."""
    catalog = catalog or build_demo_catalog()
    graph = BOMGraph.from_associations(catalog, build_demo_associations())
    logger.info(f"Seeded demo BOM graph: {len(catalog)} products, {len(graph)} associations")
    return graph
