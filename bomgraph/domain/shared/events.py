"""
Domain Events.

Domain events are records of significant business occurrences.
The host application drains them from the aggregate to refresh views
and status messages.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened in the domain.
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


# =============================================================================
# BOM EVENTS
# =============================================================================

@dataclass(frozen=True)
class AssociationAdded(DomainEvent):
    """Event raised when an association passes the guards and is inserted."""

    parent_id: str = ""
    child_id: str = ""
    quantity: str = ""
    scrap_factor: str = ""


@dataclass(frozen=True)
class AssociationUpdated(DomainEvent):
    """Event raised when quantity or scrap factor of an association changes."""

    parent_id: str = ""
    child_id: str = ""
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AssociationRemoved(DomainEvent):
    """Event raised when an association is deleted."""

    parent_id: str = ""
    child_id: str = ""


@dataclass(frozen=True)
class GraphCleared(DomainEvent):
    """Event raised when every association is dropped at once."""

    removed_count: int = 0
    reason: Optional[str] = None
