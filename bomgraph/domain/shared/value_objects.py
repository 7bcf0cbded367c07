"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ProductType(str, Enum):
    """Category of a product. Used for presentation only."""

    RAW_MATERIAL = "RAW_MATERIAL"    # Raw material
    WIP = "WIP"                      # Work in progress / semi-finished
    FINISHED_GOOD = "FINISHED_GOOD"  # Finished good

    @property
    def description(self) -> str:
        """Human readable name of the type."""
        return {
            ProductType.RAW_MATERIAL: "Raw Material",
            ProductType.WIP: "Work in Progress",
            ProductType.FINISHED_GOOD: "Finished Good",
        }[self]

    @property
    def badge_color(self) -> str:
        """Badge color used by the tree and canvas views."""
        mapping = {
            ProductType.RAW_MATERIAL: "blue",
            ProductType.WIP: "amber",
            ProductType.FINISHED_GOOD: "green",
        }
        return mapping.get(self, "gray")


class AssociationType(str, Enum):
    """Kind of product association."""

    MANUF_COMPONENT = "MANUF_COMPONENT"  # Component consumed to manufacture the parent


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class Position:
    """
    Value object representing a node position on the layout canvas.
    """

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


# =============================================================================
# HELPERS
# =============================================================================

def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Convert user input to Decimal.

    Returns None when the value cannot be interpreted as a finite number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    if not result.is_finite():
        return None
    return result


def format_amount(value: Decimal) -> str:
    """Format a decimal without trailing zeros: 500.0 -> '500', 0.50 -> '0.5'."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")
