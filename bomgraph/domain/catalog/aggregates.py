"""
Catalog Domain - Aggregates.

Catalog is the explicitly passed context that holds products and
units of measure for one BOM graph.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional

from bomgraph.domain.shared.exceptions import EntityAlreadyExistsException
from bomgraph.domain.shared.value_objects import ProductType

from .entities import Product, UnitOfMeasure


class Catalog:
    """
    Read-only product catalog.

    Several catalogs (and graphs built on them) may live in one process;
    nothing here is module-level state.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        units: Iterable[UnitOfMeasure] = (),
    ):
        self._products: Dict[str, Product] = {}
        self._units: Dict[str, UnitOfMeasure] = {}

        for product in products:
            if product.id in self._products:
                raise EntityAlreadyExistsException("Product", product.id)
            self._products[product.id] = product

        for unit in units:
            if unit.id in self._units:
                raise EntityAlreadyExistsException("UnitOfMeasure", unit.id)
            self._units[unit.id] = unit

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find_product(self, product_id: str) -> Optional[Product]:
        """Get product by id, None if it is not in the catalog."""
        return self._products.get(product_id)

    def find_unit(self, unit_id: str) -> Optional[UnitOfMeasure]:
        """Get unit of measure by id."""
        return self._units.get(unit_id)

    def unit_description(self, product: Product) -> str:
        """Unit description for display, falling back to the raw unit id."""
        unit = self.find_unit(product.unit_id)
        return unit.description if unit else product.unit_id

    def products_of_type(self, product_type: ProductType) -> List[Product]:
        return [p for p in self._products.values() if p.type_id == product_type]

    @property
    def products(self) -> List[Product]:
        """All products in catalog order."""
        return list(self._products.values())

    @property
    def units(self) -> List[UnitOfMeasure]:
        return list(self._units.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)
