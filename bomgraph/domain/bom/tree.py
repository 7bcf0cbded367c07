"""
BOM Domain - Tree view of the association graph.

Converts the flat association list into a forest of rooted trees held in
a flat node table keyed by path. A shared sub-assembly reached through two
parents appears once per incoming edge, each occurrence with its own
association.

The builder re-checks for cycles even though the cycle guard should make
them impossible. That check is a consistency backstop: a hit means an edge
bypassed the guard, and only the affected branch is truncated.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

from bomgraph.domain.catalog import Catalog, Product

from .entities import Association
from .services import find_cycle, index_children

logger = logging.getLogger(__name__)

NodeKey = Tuple[str, ...]


# =============================================================================
# ISSUES
# =============================================================================

@dataclass(frozen=True)
class OrphanReferenceWarning:
    """An association points at a product id missing from the catalog."""

    product_id: str
    parent_id: Optional[str] = None
    code: str = "ORPHAN_REFERENCE"

    @property
    def message(self) -> str:
        if self.parent_id:
            return (
                f"Product '{self.product_id}' referenced by '{self.parent_id}' "
                f"is not in the catalog"
            )
        return f"Product '{self.product_id}' is not in the catalog"


@dataclass(frozen=True)
class DefensiveCycleDetected:
    """The tree builder met a cycle that the cycle guard should have prevented."""

    path: Tuple[str, ...]
    code: str = "DEFENSIVE_CYCLE"

    @property
    def message(self) -> str:
        return f"Inconsistent BOM data, cycle {' -> '.join(self.path)}"


TreeIssue = Union[OrphanReferenceWarning, DefensiveCycleDetected]


# =============================================================================
# FOREST
# =============================================================================

@dataclass
class TreeNode:
    """One occurrence of a product in the forest."""

    key: NodeKey
    product: Product
    association: Optional[Association]  # None for roots
    parent_key: Optional[NodeKey]
    depth: int
    child_keys: List[NodeKey] = field(default_factory=list)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def is_root(self) -> bool:
        return self.parent_key is None

    @property
    def is_leaf(self) -> bool:
        return not self.child_keys


class Forest:
    """
    Zero or more rooted trees derived from an association list.

    Nodes live in a flat table keyed by the path of product ids from the
    root, so views can look up and update a node without walking nested
    objects.
    """

    def __init__(self) -> None:
        self._nodes: Dict[NodeKey, TreeNode] = {}
        self._root_keys: List[NodeKey] = []
        self.issues: List[TreeIssue] = []

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    @property
    def roots(self) -> List[TreeNode]:
        return [self._nodes[key] for key in self._root_keys]

    @property
    def nodes(self) -> Dict[NodeKey, TreeNode]:
        return dict(self._nodes)

    def node(self, key: NodeKey) -> Optional[TreeNode]:
        return self._nodes.get(tuple(key))

    def children(self, node: Union[TreeNode, NodeKey]) -> List[TreeNode]:
        """Ordered child nodes of a node."""
        if not isinstance(node, TreeNode):
            node = self._nodes[tuple(node)]
        return [self._nodes[key] for key in node.child_keys]

    def parent(self, node: TreeNode) -> Optional[TreeNode]:
        if node.parent_key is None:
            return None
        return self._nodes[node.parent_key]

    def walk(self, start: Optional[TreeNode] = None) -> Iterator[TreeNode]:
        """Pre-order traversal of the whole forest or of one subtree."""
        stack = [start] if start is not None else list(reversed(self.roots))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self.children(node)))

    def occurrences(self, product_id: str) -> List[TreeNode]:
        """Every node that shows the given product."""
        return [node for node in self._nodes.values() if node.product_id == product_id]

    @property
    def product_ids(self) -> Set[str]:
        return {node.product_id for node in self._nodes.values()}

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return self.walk()

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    def _add_node(self, node: TreeNode) -> None:
        self._nodes[node.key] = node
        if node.parent_key is None:
            self._root_keys.append(node.key)
        else:
            self._nodes[node.parent_key].child_keys.append(node.key)


def find_roots(edges: Iterable[Association]) -> List[str]:
    """Ids that appear in the edge set but never as a child, in first-seen order."""
    seen: List[str] = []
    child_ids: Set[str] = set()
    for assoc in edges:
        child_ids.add(assoc.child_id)
        for product_id in (assoc.parent_id, assoc.child_id):
            if product_id not in seen:
                seen.append(product_id)
    return [product_id for product_id in seen if product_id not in child_ids]


def build_forest(
    catalog: Catalog,
    edges: Iterable[Association],
    root_id: Optional[str] = None,
) -> Forest:
    """
    Build the forest view of the association graph.

    With ``root_id`` the forest holds exactly one tree rooted at that product
    (re-rooting); otherwise every product that is never a child is a root.
    Missing products and cycles are recorded in ``Forest.issues``.
    """
    edges = list(edges)
    children = index_children(edges)
    forest = Forest()
    reached: Set[str] = set()

    def visit(
        product_id: str,
        association: Optional[Association],
        parent_key: Optional[NodeKey],
        depth: int,
    ) -> Optional[NodeKey]:
        """Add one occurrence; None if the product is missing from the catalog."""
        product = catalog.find_product(product_id)
        if product is None:
            issue = OrphanReferenceWarning(
                product_id, association.parent_id if association else None
            )
            logger.warning(issue.message)
            forest.issues.append(issue)
            return None

        key = (parent_key or ()) + (product_id,)
        forest._add_node(TreeNode(
            key=key,
            product=product,
            association=association,
            parent_key=parent_key,
            depth=depth,
        ))
        reached.add(product_id)
        return key

    root_ids = [root_id] if root_id is not None else find_roots(edges)
    for rid in root_ids:
        root_key = visit(rid, None, None, 0)
        if root_key is None:
            continue

        # Frames of (node key, depth, ancestors on this branch, remaining child edges)
        stack = [(root_key, 0, frozenset({rid}), iter(children.get(rid, [])))]
        while stack:
            key, depth, ancestors, pending = stack[-1]
            assoc = next(pending, None)
            if assoc is None:
                stack.pop()
                continue

            if assoc.child_id in ancestors:
                issue = DefensiveCycleDetected(key + (assoc.child_id,))
                logger.error(f"{issue.message}; branch truncated at {key[-1]}")
                forest.issues.append(issue)
                continue

            child_key = visit(assoc.child_id, assoc, key, depth + 1)
            if child_key is not None:
                stack.append((
                    child_key,
                    depth + 1,
                    ancestors | {assoc.child_id},
                    iter(children.get(assoc.child_id, [])),
                ))

    if root_id is None:
        # A cycle with no way in has no root and is never expanded
        unreached = [a for a in edges if a.parent_id not in reached and a.child_id not in reached]
        cycle = find_cycle(unreached)
        if cycle:
            issue = DefensiveCycleDetected(tuple(cycle))
            logger.error(f"{issue.message}; no root leads into it")
            forest.issues.append(issue)

    logger.debug(
        f"Built forest: {len(forest.roots)} roots, {len(forest)} nodes, "
        f"{len(forest.issues)} issues"
    )
    return forest


# =============================================================================
# EXPANSION STATE
# =============================================================================

class ExpansionState:
    """
    Expanded/collapsed flag per product for the tree view.

    Products are expanded unless collapsed explicitly. The flag is per
    product, so collapsing a shared sub-assembly collapses every occurrence.
    """

    def __init__(self) -> None:
        self._expanded: Dict[str, bool] = {}

    def is_expanded(self, product_id: str) -> bool:
        return self._expanded.get(product_id, True)

    def set_expanded(self, product_id: str, expanded: bool) -> None:
        self._expanded[product_id] = expanded

    def toggle(self, product_id: str) -> bool:
        """Flip the flag and return the new state."""
        state = not self.is_expanded(product_id)
        self._expanded[product_id] = state
        return state

    def expand_all(self, forest: Forest) -> None:
        self._expanded = {product_id: True for product_id in forest.product_ids}

    def collapse_all(self, forest: Forest) -> None:
        self._expanded = {product_id: False for product_id in forest.product_ids}

    def visible_nodes(self, forest: Forest) -> List[TreeNode]:
        """Pre-order list of nodes not hidden under a collapsed ancestor."""
        visible: List[TreeNode] = []
        stack = list(reversed(forest.roots))
        while stack:
            node = stack.pop()
            visible.append(node)
            if self.is_expanded(node.product_id):
                stack.extend(reversed(forest.children(node)))
        return visible
