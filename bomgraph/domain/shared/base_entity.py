"""
Base Entity class for all domain entities.

Entities have identity and lifecycle.
Two entities are equal if they have the same identity key.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Hashable


class Entity(ABC):
    """
    Base class for all domain entities.

    Entities are objects that have a distinct identity that runs through time
    and different representations. They are defined by their identity, not their attributes.
    Subclasses declared as dataclasses must pass ``eq=False`` to keep
    identity-based equality.
    """

    @property
    @abstractmethod
    def key(self) -> Hashable:
        """Natural identity key of the entity."""

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} key={self.key!r}>"


class VersionedEntity(Entity):
    """
    Entity that counts its in-place edits.
    Subclasses provide ``version`` and ``updated_at`` attributes.
    """

    version: int
    updated_at: datetime

    def increment_version(self) -> None:
        """Increment version after an in-place update."""
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
