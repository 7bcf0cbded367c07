"""
BOM Domain - Bill of Materials graph.

This domain handles the recipe graph of products:
- Associations: parent consumes quantity of child, with a scrap factor
- Cycle guard: the graph stays acyclic
- Forest view: rooted trees derived from the flat association list
- Layout: canvas positions for the forest
"""

from .entities import Association
from .aggregates import BOMGraph, OperationResult
from .services import (
    collect_descendant_edges,
    find_cycle,
    order_siblings,
    would_create_cycle,
)
from .tree import (
    DefensiveCycleDetected,
    ExpansionState,
    Forest,
    OrphanReferenceWarning,
    TreeNode,
    build_forest,
    find_roots,
)
from .layout import LayoutResult, LayoutSettings, compute_layout

__all__ = [
    "Association",
    "BOMGraph",
    "OperationResult",
    "collect_descendant_edges",
    "find_cycle",
    "order_siblings",
    "would_create_cycle",
    "DefensiveCycleDetected",
    "ExpansionState",
    "Forest",
    "OrphanReferenceWarning",
    "TreeNode",
    "build_forest",
    "find_roots",
    "LayoutResult",
    "LayoutSettings",
    "compute_layout",
]
