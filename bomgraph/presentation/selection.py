"""
Selection state shared by the tree view, canvas and detail panel.

The selected thing is exactly one of: nothing, a product, an association.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from bomgraph.domain.bom import Association
from bomgraph.domain.catalog import Product


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class ProductSelected:
    product: Product


@dataclass(frozen=True)
class AssociationSelected:
    association: Association


Selection = Union[NoSelection, ProductSelected, AssociationSelected]


class SelectionState:
    """Current selection. Selecting one kind replaces the other."""

    def __init__(self) -> None:
        self.current: Selection = NoSelection()

    def select_product(self, product: Product) -> Selection:
        self.current = ProductSelected(product)
        return self.current

    def select_association(self, association: Association) -> Selection:
        self.current = AssociationSelected(association)
        return self.current

    def clear(self) -> Selection:
        self.current = NoSelection()
        return self.current

    @property
    def selected_key(self):
        """Product id, (parent, child) pair, or None."""
        return selection_key(self.current)


def selection_key(selection: Selection):
    if isinstance(selection, ProductSelected):
        return selection.product.id
    if isinstance(selection, AssociationSelected):
        return selection.association.key
    if isinstance(selection, NoSelection):
        return None
    raise TypeError(f"Unknown selection {selection!r}")


def describe_selection(selection: Selection) -> str:
    """Title for the detail panel."""
    if isinstance(selection, NoSelection):
        return "Nothing selected"
    if isinstance(selection, ProductSelected):
        return f"{selection.product.name} ({selection.product.id})"
    if isinstance(selection, AssociationSelected):
        assoc = selection.association
        return f"{assoc.parent_id} uses {assoc.child_id}: {assoc.label}"
    raise TypeError(f"Unknown selection {selection!r}")
