"""SQLAlchemy adapter package for castlink."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLeadSubmissionRepository,
    SqlAlchemyMembershipRepository,
    SqlAlchemyProductionRepository,
    SqlAlchemyRosterEntryRepository,
    SqlAlchemyShareableCodeRepository,
    SqlAlchemyStudioRepository,
    SqlAlchemyTalentRecordRepository,
)
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyLeadSubmissionRepository",
    "SqlAlchemyMembershipRepository",
    "SqlAlchemyProductionRepository",
    "SqlAlchemyRosterEntryRepository",
    "SqlAlchemyShareableCodeRepository",
    "SqlAlchemyStudioRepository",
    "SqlAlchemyTalentRecordRepository",
    "SqlAlchemyUnitOfWork",
    "mapper_registry",
    "start_mappers",
    "shutdown",
    "startup",
]
