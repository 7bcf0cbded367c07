"""
Catalog Domain - Entities.

Products and units of measure. Both are created from catalog data and are
read-only from the graph engine's point of view.
"""

from __future__ import annotations
from dataclasses import dataclass

from bomgraph.domain.shared.base_entity import Entity
from bomgraph.domain.shared.exceptions import ValidationException
from bomgraph.domain.shared.value_objects import ProductType


@dataclass(frozen=True)
class UnitOfMeasure:
    """Lookup row for a unit of measure (GRM, PCE, MLT, ...)."""

    id: str
    description: str


@dataclass(frozen=True, eq=False)
class Product(Entity):
    """
    A node in the BOM graph.

    Identity is the product id. Type, unit and the virtual/variant flags
    drive presentation only.
    """

    id: str
    name: str
    type_id: ProductType
    unit_id: str
    description: str = ""
    internal_name: str = ""
    is_virtual: bool = False
    is_variant: bool = False

    def __post_init__(self):
        if not self.id:
            raise ValidationException("Product id is required", "id")
        if not isinstance(self.type_id, ProductType):
            try:
                object.__setattr__(self, "type_id", ProductType(self.type_id))
            except ValueError:
                raise ValidationException(
                    f"Unknown product type '{self.type_id}'", "type_id", self.type_id
                )

    @property
    def key(self) -> str:
        return self.id

    @property
    def type_description(self) -> str:
        return self.type_id.description
