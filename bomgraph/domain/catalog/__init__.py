"""
Catalog Domain - Products and lookup tables.

This domain handles the product catalog the BOM graph refers to:
- Raw materials
- Work-in-progress (semi-finished) products
- Finished goods
- Units of measure
"""

from .entities import Product, UnitOfMeasure
from .aggregates import Catalog

__all__ = ["Product", "UnitOfMeasure", "Catalog"]
