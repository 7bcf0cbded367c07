"""
BOM Services.

Use cases the host calls on a BOM graph: render, re-root, graft with
recipe inheritance and integrity validation.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from bomgraph.domain.bom import (
    Association,
    BOMGraph,
    LayoutSettings,
    OperationResult,
    build_forest,
    collect_descendant_edges,
    compute_layout,
    find_cycle,
)
from bomgraph.domain.bom.aggregates import MAX_SCRAP_FACTOR
from bomgraph.presentation.graph import GraphView, build_graph_view

logger = logging.getLogger(__name__)


@dataclass
class GraftResult:
    """Outcome of grafting a product under a new parent."""

    link: OperationResult
    inherited: List[Association] = field(default_factory=list)
    rejected: List[OperationResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.link.ok


def render_graph(
    graph: BOMGraph,
    root_id: Optional[str] = None,
    settings: Optional[LayoutSettings] = None,
) -> GraphView:
    """
    Build the forest, lay it out and return the canvas records.

    With ``root_id`` only the tree under that product is rendered.
    """
    forest = build_forest(graph.catalog, graph.list_all_associations(), root_id=root_id)
    layout = compute_layout(forest, settings)
    view = build_graph_view(forest, layout)
    logger.debug(f"Rendered {len(view.nodes)} nodes and {len(view.edges)} edges")
    return view


def reroot(graph: BOMGraph, root_id: str) -> BOMGraph:
    """
    New working graph holding ``root_id`` and its whole existing recipe.

    The new graph shares the catalog and copies the descendant associations,
    so edits on it leave the source graph untouched.
    """
    inherited = collect_descendant_edges(root_id, graph.list_all_associations())
    working = BOMGraph.from_associations(graph.catalog, inherited)
    logger.info(f"Re-rooted at {root_id}: {len(working)} associations inherited")
    return working


def graft_product(
    graph: BOMGraph,
    master_edges: Iterable[Association],
    parent_id: str,
    child_id: str,
    quantity: Any,
    scrap_factor: Any = 0,
) -> GraftResult:
    """
    Attach ``child_id`` under ``parent_id`` and adopt the child's recipe.

    The child's descendant associations are pulled from ``master_edges`` and
    proposed one by one, so every inherited edge still passes the duplicate
    check and the cycle guard. Edges already in the graph are kept as they are.
    """
    link = graph.propose_association(parent_id, child_id, quantity, scrap_factor)
    result = GraftResult(link=link)
    if not link.ok:
        return result

    for assoc in collect_descendant_edges(child_id, master_edges):
        if graph.find_association(assoc.parent_id, assoc.child_id) is not None:
            continue
        outcome = graph.propose_association(
            assoc.parent_id,
            assoc.child_id,
            assoc.quantity,
            assoc.scrap_factor,
            sequence_num=assoc.sequence_num,
            effective_from=assoc.effective_from,
            assoc_type=assoc.assoc_type,
            routing_work_effort_id=assoc.routing_work_effort_id,
        )
        if outcome.ok:
            result.inherited.append(outcome.association)
        else:
            result.rejected.append(outcome)

    logger.info(
        f"Grafted {child_id} under {parent_id}: {len(result.inherited)} inherited, "
        f"{len(result.rejected)} rejected"
    )
    return result


def validate_graph(graph: BOMGraph) -> Dict[str, Any]:
    """
    Validate BOM graph integrity.

    Checks:
    - No circular references
    - Every referenced product exists in the catalog
    - Quantities positive, scrap factors within [0, 100]
    """
    associations = graph.list_all_associations()
    issues: List[Dict[str, Any]] = []

    cycle = find_cycle(associations)
    if cycle:
        issues.append({
            'type': 'circular_reference',
            'item_ids': cycle,
            'message': f"Circular reference detected: {' -> '.join(cycle)}",
        })

    for assoc in associations:
        for product_id in (assoc.parent_id, assoc.child_id):
            if graph.find_product(product_id) is None:
                issues.append({
                    'type': 'orphan_reference',
                    'item_id': product_id,
                    'message': f"Association {assoc.edge_id} references unknown product {product_id}",
                })
        if assoc.quantity <= 0:
            issues.append({
                'type': 'invalid_quantity',
                'item_id': assoc.edge_id,
                'message': f"Quantity must be positive, got {assoc.quantity}",
            })
        if not (0 <= assoc.scrap_factor <= MAX_SCRAP_FACTOR):
            issues.append({
                'type': 'invalid_scrap_factor',
                'item_id': assoc.edge_id,
                'message': f"Scrap factor out of range: {assoc.scrap_factor}",
            })

    logger.info(f"BOM graph validation: {len(issues)} issues found")

    return {
        'associations_count': len(associations),
        'valid': len(issues) == 0,
        'issues': issues,
    }
