"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from castlink.domain.ports.persistence import (
        AccountRepository,
        LeadSubmissionRepository,
        MembershipRepository,
        ProductionRepository,
        RosterEntryRepository,
        ShareableCodeRepository,
        StudioRepository,
        TalentRecordRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    One unit of work is one database transaction. ``commit`` raises
    ``ConcurrentUpdateError`` when a row changed since it was read and
    ``ConstraintViolationError`` when the data layer rejects a duplicate.
    """

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ReconciliationRepositories(RepositoryCollection):
    """Repositories reachable from the reconciliation engine and its write paths."""

    studios: StudioRepository
    productions: ProductionRepository
    codes: ShareableCodeRepository
    accounts: AccountRepository
    talent_records: TalentRecordRepository
    roster_entries: RosterEntryRepository
    submissions: LeadSubmissionRepository
    memberships: MembershipRepository


type ReconciliationUnitOfWork = UnitOfWork[ReconciliationRepositories]
