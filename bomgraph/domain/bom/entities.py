"""
BOM Domain - Entities.

Association represents a single parent -> child edge in the BOM graph.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Tuple

from bomgraph.domain.shared.base_entity import VersionedEntity
from bomgraph.domain.shared.value_objects import AssociationType, format_amount


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class Association(VersionedEntity):
    """
    A directed, weighted edge of the BOM graph.

    ``quantity`` units of the child are consumed to build one unit of the
    parent; ``scrap_factor`` is the expected loss of that input in percent.
    The (parent_id, child_id) pair is the identity and never changes.
    """

    parent_id: str
    child_id: str
    quantity: Decimal
    scrap_factor: Decimal = Decimal("0")

    # Order among siblings; None means insertion order
    sequence_num: Optional[int] = None

    # Carried through unchanged
    effective_from: Optional[datetime] = None
    assoc_type: AssociationType = AssociationType.MANUF_COMPONENT
    routing_work_effort_id: Optional[str] = None

    version: int = 1
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.parent_id, self.child_id)

    @property
    def edge_id(self) -> str:
        """Identifier used by the canvas for this edge."""
        return f"{self.parent_id}-{self.child_id}"

    @property
    def label(self) -> str:
        """Edge label, e.g. '500 (scrap: 5%)' or '4' when there is no scrap."""
        text = format_amount(self.quantity)
        if self.scrap_factor:
            text += f" (scrap: {format_amount(self.scrap_factor)}%)"
        return text

    def update_amounts(
        self,
        quantity: Optional[Decimal] = None,
        scrap_factor: Optional[Decimal] = None,
    ) -> dict:
        """Update quantity and/or scrap factor in place. Returns the changes."""
        changes = {}
        if quantity is not None and quantity != self.quantity:
            self.quantity = quantity
            changes["quantity"] = str(quantity)
        if scrap_factor is not None and scrap_factor != self.scrap_factor:
            self.scrap_factor = scrap_factor
            changes["scrap_factor"] = str(scrap_factor)
        if changes:
            self.increment_version()
        return changes
