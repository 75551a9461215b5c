"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    AccountRepository,
    LeadSubmissionRepository,
    MembershipRepository,
    ProductionRepository,
    Repository,
    RosterEntryRepository,
    ShareableCodeRepository,
    StudioRepository,
    TalentRecordRepository,
)
from .unit_of_work import (
    ReconciliationRepositories,
    ReconciliationUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "LeadSubmissionRepository",
    "MembershipRepository",
    "ProductionRepository",
    "ReconciliationRepositories",
    "ReconciliationUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "RosterEntryRepository",
    "ShareableCodeRepository",
    "StudioRepository",
    "TalentRecordRepository",
    "UnitOfWork",
]
