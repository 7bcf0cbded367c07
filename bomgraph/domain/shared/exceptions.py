"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations in the BOM graph.
"""

from typing import Optional, Any, Dict


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )


class EntityAlreadyExistsException(DomainException):
    """Raised when trying to create an entity that already exists."""

    def __init__(self, entity_type: str, identifier: Any):
        super().__init__(
            message=f"{entity_type} with identifier '{identifier}' already exists",
            code="ENTITY_ALREADY_EXISTS",
            details={"entity_type": entity_type, "identifier": str(identifier)}
        )


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )


class DuplicateAssociationException(EntityAlreadyExistsException):
    """Raised when an association for the same (parent, child) pair already exists."""

    def __init__(self, parent_id: str, child_id: str):
        super().__init__("Association", f"{parent_id}->{child_id}")
        self.code = "DUPLICATE_ASSOCIATION"
        self.details.update({"parent_id": parent_id, "child_id": child_id})


class CircularReferenceException(DomainException):
    """Raised when adding an association would create a cycle in the BOM graph."""

    def __init__(self, parent_id: str, child_id: str):
        super().__init__(
            message=f"Association {parent_id} -> {child_id} would create a circular reference",
            code="CIRCULAR_REFERENCE",
            details={"parent_id": parent_id, "child_id": child_id}
        )
        self.parent_id = parent_id
        self.child_id = child_id
