"""Errors raised by the reconciliation domain."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from .enums import EntityType


class ReconciliationError(Exception):
    """Base class for every domain-level reconciliation failure."""


class NotFoundError(ReconciliationError, LookupError):
    """A referenced record does not exist."""

    def __init__(self, entity_type: EntityType, entity_id: UUID | str) -> None:
        super().__init__(f"{entity_type} {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class AlreadyConvertedError(ReconciliationError):
    """The record was already converted; callers treat this as success."""


class TerminalStateConflictError(ReconciliationError):
    """The record sits in a terminal state that forbids conversion (e.g. REJECTED)."""


class ConcurrentUpdateError(ReconciliationError):
    """A write lost a race: the row changed between read and commit."""


class ConstraintViolationError(ReconciliationError):
    """The data layer refused a write because of a uniqueness or integrity rule."""


class CodeUnavailableError(ReconciliationError):
    """A shareable code exists but no longer accepts submissions."""


class PersistenceError(ReconciliationError):
    """The storage adapter failed for a reason other than a lost race or a duplicate."""
