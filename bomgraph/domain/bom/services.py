"""
BOM Domain - Graph services.

Stateless algorithms over a flat association list:
- sibling ordering
- cycle guard for candidate edges
- cycle detection over a whole edge set
- descendant edge collection for re-rooting and grafting
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .entities import Association

logger = logging.getLogger(__name__)


def order_siblings(associations: Iterable[Association]) -> List[Association]:
    """
    Order associations by sequence number, ties broken by input order.

    Associations without a sequence number go after the numbered ones.
    """
    indexed = list(enumerate(associations))
    indexed.sort(key=lambda pair: (
        pair[1].sequence_num is None,
        pair[1].sequence_num or 0,
        pair[0],
    ))
    return [assoc for _, assoc in indexed]


def index_children(edges: Iterable[Association]) -> Dict[str, List[Association]]:
    """Map each parent id to its ordered outgoing associations."""
    grouped: Dict[str, List[Association]] = {}
    for assoc in edges:
        grouped.setdefault(assoc.parent_id, []).append(assoc)
    return {parent_id: order_siblings(group) for parent_id, group in grouped.items()}


# =============================================================================
# CYCLE GUARD
# =============================================================================

def would_create_cycle(
    candidate_parent_id: str,
    candidate_child_id: str,
    existing_edges: Iterable[Association],
) -> bool:
    """
    Check whether adding ``candidate_parent_id -> candidate_child_id`` closes a cycle.

    That is the case for a self-loop, or when the parent is already reachable
    from the child along existing parent -> child edges. The visited set
    keeps the search finite even if the existing data is already cyclic.
    """
    if candidate_parent_id == candidate_child_id:
        return True

    children = index_children(existing_edges)
    visited: Set[str] = set()
    stack = [candidate_child_id]

    while stack:
        node_id = stack.pop()
        if node_id == candidate_parent_id:
            logger.debug(
                f"Cycle guard: {candidate_parent_id} is reachable from {candidate_child_id}"
            )
            return True
        if node_id in visited:
            continue
        visited.add(node_id)
        for assoc in children.get(node_id, []):
            if assoc.child_id not in visited:
                stack.append(assoc.child_id)

    return False


def find_cycle(edges: Iterable[Association]) -> Optional[List[str]]:
    """
    Find one directed cycle in the edge set.

    Returns the cycle as a list of product ids where the first id is repeated
    at the end (``['A', 'B', 'A']``), or None if the graph is acyclic.
    """
    children = index_children(edges)
    nodes: List[str] = []
    for parent_id, group in children.items():
        if parent_id not in nodes:
            nodes.append(parent_id)
        for assoc in group:
            if assoc.child_id not in nodes:
                nodes.append(assoc.child_id)

    done: Set[str] = set()

    for start in nodes:
        if start in done:
            continue
        # Iterative DFS keeping the active path on the stack
        path: List[str] = [start]
        on_path: Set[str] = {start}
        iterators = [iter(children.get(start, []))]

        while iterators:
            assoc = next(iterators[-1], None)
            if assoc is None:
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                iterators.pop()
                continue
            child_id = assoc.child_id
            if child_id in on_path:
                return path[path.index(child_id):] + [child_id]
            if child_id in done:
                continue
            path.append(child_id)
            on_path.add(child_id)
            iterators.append(iter(children.get(child_id, [])))

    return None


# =============================================================================
# SUBTREE COLLECTOR
# =============================================================================

def collect_descendant_edges(
    root_id: str,
    all_edges: Iterable[Association],
) -> List[Association]:
    """
    Collect every edge on every directed path starting at ``root_id``.

    Edges come out in depth-first pre-order following sibling order, each
    (parent, child) pair once. The ancestor set is copied per branch, so a
    diamond (two parents sharing a descendant) is not mistaken for a cycle,
    while already-cyclic data still terminates.
    """
    children = index_children(all_edges)
    collected: List[Association] = []
    seen_pairs: Set[Tuple[str, str]] = set()
    # Nodes whose outgoing edges were already walked via another parent
    expanded: Set[str] = {root_id}

    # Frames of (node id, ancestors on this branch, remaining child edges)
    stack = [(root_id, frozenset({root_id}), iter(children.get(root_id, [])))]
    while stack:
        node_id, ancestors, pending = stack[-1]
        assoc = next(pending, None)
        if assoc is None:
            stack.pop()
            continue

        if assoc.key not in seen_pairs:
            seen_pairs.add(assoc.key)
            collected.append(assoc)
        if assoc.child_id in ancestors:
            logger.error(
                f"Cycle in stored associations at {node_id} -> {assoc.child_id}, "
                f"branch not followed"
            )
            continue
        if assoc.child_id in expanded:
            continue
        expanded.add(assoc.child_id)
        stack.append((
            assoc.child_id,
            ancestors | {assoc.child_id},
            iter(children.get(assoc.child_id, [])),
        ))

    logger.debug(f"Collected {len(collected)} descendant associations of {root_id}")
    return collected
