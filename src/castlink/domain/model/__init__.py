"""Public domain model surface."""

from __future__ import annotations

from castlink.domain.model.entity import Entity
from castlink.domain.model.enums import EntityType, RosterStatus, SubmissionStatus
from castlink.domain.model.errors import (
    AlreadyConvertedError,
    CodeUnavailableError,
    ConcurrentUpdateError,
    ConstraintViolationError,
    NotFoundError,
    PersistenceError,
    ReconciliationError,
    TerminalStateConflictError,
)
from castlink.domain.model.identity import Account, TalentRecord
from castlink.domain.model.membership import Membership
from castlink.domain.model.primitives import normalize_email, normalize_phone, utcnow
from castlink.domain.model.shadow import LeadSubmission, RosterEntry, RosterProduction
from castlink.domain.model.studio import Production, ShareableCode, Studio

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # studio side
    "Studio",
    "Production",
    "ShareableCode",
    # canonical identity
    "Account",
    "TalentRecord",
    # shadow records
    "RosterEntry",
    "RosterProduction",
    "LeadSubmission",
    # membership
    "Membership",
    # enums
    "EntityType",
    "RosterStatus",
    "SubmissionStatus",
    # errors
    "ReconciliationError",
    "NotFoundError",
    "AlreadyConvertedError",
    "TerminalStateConflictError",
    "ConcurrentUpdateError",
    "ConstraintViolationError",
    "PersistenceError",
    "CodeUnavailableError",
    # primitives
    "normalize_email",
    "normalize_phone",
    "utcnow",
]
