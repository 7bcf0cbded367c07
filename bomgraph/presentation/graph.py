"""
Graph view records.

Turns a forest and its layout into the flat node/edge records a canvas
renders, plus a nested tree payload for the tree view.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from bomgraph.domain.bom import Association, Forest, LayoutResult, TreeNode
from bomgraph.domain.catalog import Catalog, Product
from bomgraph.domain.shared.value_objects import Position, format_amount


@dataclass(frozen=True)
class NodeView:
    """A product box on the canvas."""

    id: str
    product: Product
    association: Optional[Association]
    position: Position

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': 'productNode',
            'position': {'x': self.position.x, 'y': self.position.y},
            'data': {
                'product': serialize_product(self.product),
                'association': serialize_association(self.association) if self.association else None,
            },
        }


@dataclass(frozen=True)
class EdgeView:
    """A labelled parent -> child connection on the canvas."""

    id: str
    source: str
    target: str
    label: str
    association: Association

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'target': self.target,
            'label': self.label,
            'type': 'smoothstep',
            'data': serialize_association(self.association),
        }


@dataclass
class GraphView:
    """Everything the canvas needs for one render pass."""

    nodes: List[NodeView] = field(default_factory=list)
    edges: List[EdgeView] = field(default_factory=list)
    issues: List[Any] = field(default_factory=list)

    def node(self, product_id: str) -> Optional[NodeView]:
        for node in self.nodes:
            if node.id == product_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [node.to_dict() for node in self.nodes],
            'edges': [edge.to_dict() for edge in self.edges],
            'issues': [{'code': issue.code, 'message': issue.message} for issue in self.issues],
        }


def build_graph_view(forest: Forest, layout: LayoutResult) -> GraphView:
    """
    One node per product and one edge per association in the forest.

    A product shown under several parents is drawn at its last occurrence
    in pre-order and carries the association of that same occurrence.
    """
    view = GraphView(issues=list(forest.issues))
    # Product id -> last occurrence; dict order keeps first-seen order
    last_occurrence: Dict[str, TreeNode] = {}
    seen_edges = set()

    for tree_node in forest.walk():
        last_occurrence[tree_node.product_id] = tree_node

        assoc = tree_node.association
        if assoc is not None and assoc.edge_id not in seen_edges:
            seen_edges.add(assoc.edge_id)
            view.edges.append(EdgeView(
                id=assoc.edge_id,
                source=assoc.parent_id,
                target=assoc.child_id,
                label=assoc.label,
                association=assoc,
            ))

    view.nodes = [
        NodeView(
            id=product_id,
            product=tree_node.product,
            association=tree_node.association,
            position=layout.node_positions[tree_node.key],
        )
        for product_id, tree_node in last_occurrence.items()
    ]
    return view


# =============================================================================
# SERIALIZERS
# =============================================================================

def serialize_product(product: Product, catalog: Optional[Catalog] = None) -> Dict[str, Any]:
    data = {
        'id': product.id,
        'name': product.name,
        'description': product.description,
        'internal_name': product.internal_name,
        'type_id': product.type_id.value,
        'type_display': product.type_description,
        'badge_color': product.type_id.badge_color,
        'unit_id': product.unit_id,
        'is_virtual': product.is_virtual,
        'is_variant': product.is_variant,
    }
    if catalog is not None:
        data['unit_display'] = catalog.unit_description(product)
    return data


def serialize_association(assoc: Association) -> Dict[str, Any]:
    return {
        'id': assoc.edge_id,
        'parent_id': assoc.parent_id,
        'child_id': assoc.child_id,
        'assoc_type': assoc.assoc_type.value,
        'quantity': format_amount(assoc.quantity),
        'scrap_factor': format_amount(assoc.scrap_factor),
        'sequence_num': assoc.sequence_num,
        'effective_from': assoc.effective_from.isoformat() if assoc.effective_from else None,
        'routing_work_effort_id': assoc.routing_work_effort_id,
        'label': assoc.label,
    }


def serialize_tree(
    forest: Forest,
    catalog: Optional[Catalog] = None,
    visible: Optional[List[TreeNode]] = None,
) -> List[Dict[str, Any]]:
    """
    Nested payload for the tree view, one entry per occurrence.

    When ``visible`` is given (see ``ExpansionState.visible_nodes``), the
    children of hidden nodes are left out and ``expanded`` is False for
    nodes whose children are hidden.
    """
    visible_keys = {node.key for node in visible} if visible is not None else None
    payload: List[Dict[str, Any]] = []
    entries: Dict[Tuple[str, ...], Dict[str, Any]] = {}

    # Pre-order, so a parent's entry exists before its children are attached
    for node in forest.walk():
        if node.is_root:
            siblings = payload
        elif node.parent_key in entries and (visible_keys is None or node.key in visible_keys):
            siblings = entries[node.parent_key]['children']
        else:
            continue

        children = forest.children(node)
        shown = [c for c in children if visible_keys is None or c.key in visible_keys]
        entry = {
            'key': '/'.join(node.key),
            'product': serialize_product(node.product, catalog),
            'association': serialize_association(node.association) if node.association else None,
            'level': node.depth,
            'has_children': bool(children),
            'expanded': bool(shown) or not children,
            'children': [],
        }
        entries[node.key] = entry
        siblings.append(entry)

    return payload
