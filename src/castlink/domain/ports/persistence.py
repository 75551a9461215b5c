"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from castlink.domain.model import (
    Account,
    LeadSubmission,
    Membership,
    Production,
    RosterEntry,
    ShareableCode,
    Studio,
    TalentRecord,
)

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def get(self, entity_id: UUID) -> TEntity | None: ...


@runtime_checkable
class StudioRepository(Repository[Studio], Protocol):
    """Repository contract for studios."""


@runtime_checkable
class ProductionRepository(Repository[Production], Protocol):
    """Repository contract for productions."""


@runtime_checkable
class ShareableCodeRepository(Repository[ShareableCode], Protocol):
    """Repository contract for shareable codes."""

    def get_by_code(self, code: str) -> ShareableCode | None: ...


@runtime_checkable
class AccountRepository(Repository[Account], Protocol):
    """Repository contract for registered accounts."""

    def get_by_email(self, email: str) -> Account | None: ...


@runtime_checkable
class TalentRecordRepository(Repository[TalentRecord], Protocol):
    """Repository contract for talent records."""

    def get_by_account(self, account_id: UUID) -> TalentRecord | None: ...


@runtime_checkable
class RosterEntryRepository(Repository[RosterEntry], Protocol):
    """Persistence contract for roster entries.

    ``get(..., for_update=True)`` must re-read the row from the database inside
    the current transaction so status checks never rely on a stale copy.
    """

    def get(self, entity_id: UUID, *, for_update: bool = False) -> RosterEntry | None: ...

    def find_active_by_contact(self, *, email: str, phone: str | None) -> list[RosterEntry]: ...

    def list_converted_to(self, talent_id: UUID) -> list[RosterEntry]: ...

    def find_in_studio_by_email(self, studio_id: UUID, email: str) -> RosterEntry | None: ...

    def find_in_studio_by_name(
        self,
        studio_id: UUID,
        *,
        first_name: str,
        last_name: str,
        phone: str | None = None,
    ) -> RosterEntry | None: ...


@runtime_checkable
class LeadSubmissionRepository(Repository[LeadSubmission], Protocol):
    """Persistence contract for lead submissions."""

    def get(self, entity_id: UUID, *, for_update: bool = False) -> LeadSubmission | None: ...

    def list_converted_to(self, talent_id: UUID) -> list[LeadSubmission]: ...


@runtime_checkable
class MembershipRepository(Repository[Membership], Protocol):
    """Persistence contract for production memberships."""

    def exists(self, *, production_id: UUID, talent_id: UUID) -> bool: ...

    def list_for_talent(self, talent_id: UUID) -> list[Membership]: ...
