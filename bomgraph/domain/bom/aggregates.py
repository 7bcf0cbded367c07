"""
BOM Domain - Aggregates.

BOMGraph is the aggregate root that owns the association set of one
Bill of Materials graph and is the only place where edges are inserted.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bomgraph.domain.catalog import Catalog, Product
from bomgraph.domain.shared.base_aggregate import AggregateRoot
from bomgraph.domain.shared.events import (
    AssociationAdded,
    AssociationRemoved,
    AssociationUpdated,
    GraphCleared,
)
from bomgraph.domain.shared.exceptions import (
    CircularReferenceException,
    DomainException,
    DuplicateAssociationException,
    EntityNotFoundException,
    ValidationException,
)
from bomgraph.domain.shared.value_objects import AssociationType, to_decimal

from .entities import Association
from .services import find_cycle, order_siblings, would_create_cycle

logger = logging.getLogger(__name__)

MAX_SCRAP_FACTOR = Decimal("100")


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a graph mutation.

    Expected failures (validation, duplicates, cycles, missing edges) come
    back here as ``error`` instead of being raised to the host.
    """

    association: Optional[Association] = None
    error: Optional[DomainException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> str:
        return self.error.code if self.error else "OK"

    @classmethod
    def success(cls, association: Optional[Association] = None) -> OperationResult:
        return cls(association=association)

    @classmethod
    def failure(cls, error: DomainException) -> OperationResult:
        return cls(error=error)


class BOMGraph(AggregateRoot):
    """
    Aggregate root for a BOM graph.

    Key responsibilities:
    - Keep the association set acyclic (cycle guard on every insertion)
    - Keep at most one association per (parent, child) pair
    - Validate quantities, scrap factors and product references
    - Emit domain events for inserted, edited and removed associations
    """

    def __init__(self, catalog: Catalog):
        super().__init__()
        self._catalog = catalog
        self._associations: List[Association] = []
        self._by_key: Dict[Tuple[str, str], Association] = {}

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def __len__(self) -> int:
        return len(self._associations)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def find_product(self, product_id: str) -> Optional[Product]:
        """Get product by id, None if it is not in the catalog."""
        return self._catalog.find_product(product_id)

    def find_association(self, parent_id: str, child_id: str) -> Optional[Association]:
        return self._by_key.get((parent_id, child_id))

    def list_associations_from(self, parent_id: str) -> List[Association]:
        """Outgoing associations of a product ordered by sequence number."""
        return order_siblings(a for a in self._associations if a.parent_id == parent_id)

    def list_associations_to(self, child_id: str) -> List[Association]:
        """Incoming associations of a product (where it is used)."""
        return [a for a in self._associations if a.child_id == child_id]

    def list_all_associations(self) -> List[Association]:
        """All associations in insertion order."""
        return self._associations.copy()

    def has_children(self, product_id: str) -> bool:
        return any(a.parent_id == product_id for a in self._associations)

    def product_ids_in_use(self) -> List[str]:
        """Ids appearing in any association, in first-seen order."""
        ids: List[str] = []
        for assoc in self._associations:
            for product_id in (assoc.parent_id, assoc.child_id):
                if product_id not in ids:
                    ids.append(product_id)
        return ids

    # =========================================================================
    # COMMANDS (result values)
    # =========================================================================

    def propose_association(
        self,
        parent_id: str,
        child_id: str,
        quantity: Any,
        scrap_factor: Any = 0,
        sequence_num: Optional[int] = None,
        effective_from: Optional[datetime] = None,
        assoc_type: AssociationType = AssociationType.MANUF_COMPONENT,
        routing_work_effort_id: Optional[str] = None,
    ) -> OperationResult:
        """
        Propose a new edge. The only sanctioned way to insert one.

        Runs validation, then the duplicate check, then the cycle guard.
        On any rejection the graph is left unchanged.
        """
        try:
            association = self.add_association(
                parent_id,
                child_id,
                quantity,
                scrap_factor,
                sequence_num=sequence_num,
                effective_from=effective_from,
                assoc_type=assoc_type,
                routing_work_effort_id=routing_work_effort_id,
            )
        except DomainException as exc:
            logger.info(f"Rejected association {parent_id} -> {child_id}: [{exc.code}] {exc.message}")
            return OperationResult.failure(exc)
        return OperationResult.success(association)

    def update_association(
        self,
        parent_id: str,
        child_id: str,
        quantity: Any = None,
        scrap_factor: Any = None,
    ) -> OperationResult:
        """Edit quantity and/or scrap factor of an existing edge."""
        try:
            association = self.change_amounts(parent_id, child_id, quantity, scrap_factor)
        except DomainException as exc:
            logger.info(f"Rejected update of {parent_id} -> {child_id}: [{exc.code}] {exc.message}")
            return OperationResult.failure(exc)
        return OperationResult.success(association)

    def remove_association(self, parent_id: str, child_id: str) -> OperationResult:
        """Delete an edge. The removed association is returned in the result."""
        try:
            association = self.delete_association(parent_id, child_id)
        except DomainException as exc:
            return OperationResult.failure(exc)
        return OperationResult.success(association)

    def clear(self, reason: Optional[str] = None) -> int:
        """Drop every association. Returns how many were removed."""
        removed = len(self._associations)
        self._associations.clear()
        self._by_key.clear()
        self.add_domain_event(GraphCleared(removed_count=removed, reason=reason))
        logger.info(f"Cleared BOM graph ({removed} associations)")
        return removed

    def reset(self, associations: Iterable[Association]) -> List[OperationResult]:
        """
        Replace the whole association set.

        Every incoming edge goes through ``propose_association`` in order, so
        the replacement set can never carry a cycle or a duplicate.
        """
        self.clear(reason="reset")
        results = [
            self.propose_association(
                assoc.parent_id,
                assoc.child_id,
                assoc.quantity,
                assoc.scrap_factor,
                sequence_num=assoc.sequence_num,
                effective_from=assoc.effective_from,
                assoc_type=assoc.assoc_type,
                routing_work_effort_id=assoc.routing_work_effort_id,
            )
            for assoc in associations
        ]
        rejected = sum(1 for r in results if not r.ok)
        if rejected:
            logger.warning(f"Reset skipped {rejected} of {len(results)} associations")
        return results

    # =========================================================================
    # COMMANDS (raising)
    # =========================================================================

    def add_association(
        self,
        parent_id: str,
        child_id: str,
        quantity: Any,
        scrap_factor: Any = 0,
        sequence_num: Optional[int] = None,
        effective_from: Optional[datetime] = None,
        assoc_type: AssociationType = AssociationType.MANUF_COMPONENT,
        routing_work_effort_id: Optional[str] = None,
    ) -> Association:
        """
        Add an association to the graph.

        Validates:
        - Association type is known
        - Quantity is positive and scrap factor is within [0, 100]
        - Both products exist in the catalog
        - The (parent, child) pair is not present yet
        - The new edge does not close a cycle
        """
        try:
            assoc_type = AssociationType(assoc_type)
        except ValueError:
            raise ValidationException("Unknown association type", "assoc_type", assoc_type)

        qty, scrap = self._validate_amounts(quantity, scrap_factor)
        self._require_product(parent_id, "parent_id")
        self._require_product(child_id, "child_id")
        if sequence_num is not None and (
            isinstance(sequence_num, bool) or not isinstance(sequence_num, int) or sequence_num < 1
        ):
            raise ValidationException(
                "Sequence number must be a positive integer", "sequence_num", sequence_num
            )

        if (parent_id, child_id) in self._by_key:
            raise DuplicateAssociationException(parent_id, child_id)

        if would_create_cycle(parent_id, child_id, self._associations):
            raise CircularReferenceException(parent_id, child_id)

        if sequence_num is None:
            sequence_num = len(self.list_associations_from(parent_id)) + 1

        association = Association(
            parent_id=parent_id,
            child_id=child_id,
            quantity=qty,
            scrap_factor=scrap,
            sequence_num=sequence_num,
            effective_from=effective_from,
            assoc_type=assoc_type,
            routing_work_effort_id=routing_work_effort_id,
        )
        self._associations.append(association)
        self._by_key[association.key] = association

        self.add_domain_event(AssociationAdded(
            parent_id=parent_id,
            child_id=child_id,
            quantity=str(qty),
            scrap_factor=str(scrap),
        ))
        logger.info(f"Added association {parent_id} -> {child_id} ({association.label})")
        return association

    def change_amounts(
        self,
        parent_id: str,
        child_id: str,
        quantity: Any = None,
        scrap_factor: Any = None,
    ) -> Association:
        """Update quantity and/or scrap factor. Identity never changes."""
        association = self._by_key.get((parent_id, child_id))
        if association is None:
            raise EntityNotFoundException("Association", f"{parent_id}->{child_id}")

        qty, scrap = self._validate_amounts(
            association.quantity if quantity is None else quantity,
            association.scrap_factor if scrap_factor is None else scrap_factor,
        )
        changes = association.update_amounts(qty, scrap)
        if changes:
            self.add_domain_event(AssociationUpdated(
                parent_id=parent_id,
                child_id=child_id,
                changes=changes,
            ))
            logger.info(f"Updated association {parent_id} -> {child_id}: {changes}")
        return association

    def delete_association(self, parent_id: str, child_id: str) -> Association:
        association = self._by_key.pop((parent_id, child_id), None)
        if association is None:
            raise EntityNotFoundException("Association", f"{parent_id}->{child_id}")

        self._associations.remove(association)
        self.add_domain_event(AssociationRemoved(parent_id=parent_id, child_id=child_id))
        logger.info(f"Removed association {parent_id} -> {child_id}")
        return association

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _validate_amounts(self, quantity: Any, scrap_factor: Any) -> Tuple[Decimal, Decimal]:
        qty = to_decimal(quantity)
        if qty is None or qty <= 0:
            raise ValidationException("Quantity must be a positive number", "quantity", quantity)

        scrap = to_decimal(0 if scrap_factor is None else scrap_factor)
        if scrap is None or scrap < 0 or scrap > MAX_SCRAP_FACTOR:
            raise ValidationException(
                "Scrap factor must be between 0 and 100", "scrap_factor", scrap_factor
            )
        return qty, scrap

    def _require_product(self, product_id: str, field: str) -> None:
        if product_id not in self._catalog:
            raise ValidationException(
                f"Product '{product_id}' not found in catalog", field, product_id
            )

    def validate(self) -> None:
        """Validate aggregate invariants."""
        cycle = find_cycle(self._associations)
        if cycle:
            raise CircularReferenceException(cycle[-2], cycle[-1])

        for assoc in self._associations:
            self._require_product(assoc.parent_id, "parent_id")
            self._require_product(assoc.child_id, "child_id")

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_associations(
        cls,
        catalog: Catalog,
        associations: Iterable[Association],
    ) -> BOMGraph:
        """Create a graph and load associations through the guards."""
        graph = cls(catalog)
        graph.reset(associations)
        graph.clear_domain_events()
        return graph
