"""
BOM graph engine.

In-memory Bill of Materials graph: products, weighted parent -> child
associations kept acyclic, forest view, tree layout and subtree collection.
"""

from bomgraph.domain.bom import (
    Association,
    BOMGraph,
    OperationResult,
    build_forest,
    collect_descendant_edges,
    compute_layout,
    would_create_cycle,
)
from bomgraph.domain.catalog import Catalog, Product, UnitOfMeasure

__version__ = "1.0.0"

__all__ = [
    "Association",
    "BOMGraph",
    "Catalog",
    "OperationResult",
    "Product",
    "UnitOfMeasure",
    "build_forest",
    "collect_descendant_edges",
    "compute_layout",
    "would_create_cycle",
]
