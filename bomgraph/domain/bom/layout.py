"""
BOM Domain - Tree layout.

Assigns every node of a forest a canvas position. Leaves take one
horizontal slot each; a parent spans the sum of its children's slots and
sits centered over them. Roots are placed left to right.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from bomgraph.domain.shared.value_objects import Position

from .tree import Forest, NodeKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSettings:
    """Spacing between layout slots (horizontal) and depth levels (vertical)."""

    h_spacing: float = 200.0
    v_spacing: float = 120.0

    def __post_init__(self):
        if self.h_spacing <= 0 or self.v_spacing <= 0:
            raise ValueError("Layout spacing must be positive")

    @classmethod
    def from_settings(cls) -> LayoutSettings:
        """Build from the active configuration module."""
        from bomgraph.config import settings
        return cls(
            h_spacing=settings.LAYOUT_H_SPACING,
            v_spacing=settings.LAYOUT_V_SPACING,
        )


@dataclass
class LayoutResult:
    """Positions computed for one forest."""

    settings: LayoutSettings
    node_positions: Dict[NodeKey, Position] = field(default_factory=dict)
    # Horizontal slot span of each subtree: (first slot, width in slots)
    spans: Dict[NodeKey, Tuple[float, float]] = field(default_factory=dict)
    positions: Dict[str, Position] = field(default_factory=dict)
    total_width: float = 0

    @property
    def widths(self) -> Dict[NodeKey, float]:
        return {key: width for key, (_, width) in self.spans.items()}

    def position_of(self, product_id: str) -> Optional[Position]:
        return self.positions.get(product_id)


def compute_layout(
    forest: Forest,
    settings: Optional[LayoutSettings] = None,
) -> LayoutResult:
    """
    Lay out a forest.

    Deterministic: the same forest shape and child order always give the
    same coordinates. For a product shown more than once, ``positions``
    keeps its last occurrence in pre-order; ``node_positions`` has them all.
    """
    settings = settings or LayoutSettings.from_settings()
    result = LayoutResult(settings=settings)

    order = list(forest.walk())

    # Children follow their parent in pre-order, so the reverse sees them first
    widths: Dict[NodeKey, int] = {}
    for node in reversed(order):
        widths[node.key] = max(1, sum(widths[child.key] for child in forest.children(node)))

    offsets: Dict[NodeKey, int] = {}
    offset = 0
    for root in forest.roots:
        offsets[root.key] = offset
        offset += widths[root.key]

    for node in order:
        start, width = offsets[node.key], widths[node.key]
        child_offset = start
        for child in forest.children(node):
            offsets[child.key] = child_offset
            child_offset += widths[child.key]

        center = start + width / 2 - 0.5
        result.node_positions[node.key] = Position(
            center * settings.h_spacing, node.depth * settings.v_spacing
        )
        result.spans[node.key] = (start, width)

    result.total_width = offset

    for node in order:
        result.positions[node.product_id] = result.node_positions[node.key]

    logger.debug(f"Laid out {len(result.node_positions)} nodes across {offset} slots")
    return result
