"""Domain errors raised by the assignment use cases.

Every error carries the human-readable ``reason`` that was written to the
assignment log and, when one was produced, the failed ``Assignment`` itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from delivery.domain.entities.assignment import Assignment


class AssignmentError(Exception):
    def __init__(self, reason: str, assignment: Assignment | None = None):
        super().__init__(reason)
        self.reason = reason
        self.assignment = assignment


class NotFoundError(AssignmentError):
    """Order or partner does not exist."""


class InvalidStateError(AssignmentError):
    """Over capacity, area not covered, or order not in an eligible status."""


class ConflictError(AssignmentError):
    """A conditional update lost the race against a concurrent writer."""


class PersistenceError(AssignmentError):
    """The store itself failed."""
