"""
Status messages for the host's status bar.

Maps operation outcomes and forest issues to one message per kind, so the
host shows a specific message instead of a generic failure.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from bomgraph.domain.bom import DefensiveCycleDetected, OperationResult, OrphanReferenceWarning


class StatusKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    kind: StatusKind
    message: str
    code: str = "OK"

    @property
    def is_error(self) -> bool:
        return self.kind == StatusKind.ERROR


ERROR_MESSAGES = {
    'DUPLICATE_ASSOCIATION': "This relationship already exists",
    'CIRCULAR_REFERENCE': "Adding this relationship would create a cyclic dependency",
    'ENTITY_NOT_FOUND': "Relationship not found",
}

SUCCESS_MESSAGES = {
    'add': "Added new BOM relationship",
    'update': "Relationship attributes updated",
    'remove': "Relationship removed",
}


def status_for(result: OperationResult, action: str = 'add') -> StatusMessage:
    """Status message for the outcome of an add/update/remove operation."""
    if result.ok:
        return StatusMessage(StatusKind.SUCCESS, SUCCESS_MESSAGES.get(action, "Done"))

    error = result.error
    # Validation messages already name the offending field
    message = ERROR_MESSAGES.get(error.code, error.message)
    return StatusMessage(StatusKind.ERROR, message, code=error.code)


def status_for_issue(issue: Union[OrphanReferenceWarning, DefensiveCycleDetected]) -> StatusMessage:
    """Status message for a problem found while building the forest."""
    if isinstance(issue, DefensiveCycleDetected):
        return StatusMessage(
            StatusKind.ERROR,
            f"Internal consistency error: {issue.message}",
            code=issue.code,
        )
    return StatusMessage(StatusKind.INFO, issue.message, code=issue.code)
