"""Bulk import of a studio's roster."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from castlink.domain.model import (
    EntityType,
    NotFoundError,
    ReconciliationError,
    RosterEntry,
    normalize_email,
    normalize_phone,
    utcnow,
)
from castlink.domain.reconciliation import DEFAULT_MEMBER_ROLE, MembershipTarget, ensure_membership

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import datetime
    from uuid import UUID

    from castlink.domain.ports import ReconciliationRepositories
    from castlink.domain.reconciliation import UnitOfWorkFactory

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class RosterRow:
    """One row of a roster import; ``row_number`` is 1-based."""

    row_number: int
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class RosterRowError:
    row_number: int
    message: str


@dataclass(slots=True)
class RosterImportResult:
    created: list[UUID] = field(default_factory=list["UUID"])
    converted: list[UUID] = field(default_factory=list["UUID"])
    duplicates: int = 0
    errors: list[RosterRowError] = field(default_factory=list["RosterRowError"])

    @property
    def imported(self) -> int:
        return len(self.created)


def import_roster(
    studio_id: UUID,
    rows: Iterable[RosterRow],
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    production_id: UUID | None = None,
    default_role: str = DEFAULT_MEMBER_ROLE,
    clock: Callable[[], datetime] = utcnow,
) -> RosterImportResult:
    """Create roster entries for ``studio_id``; one transaction per row.

    Rows already on the roster (same email, or same name and phone for rows
    without an email) are counted as duplicates. A row whose email belongs to
    a registered talent account is stored already converted to it. Invalid rows
    and storage failures are reported per row; the rest of the batch goes on.
    """

    _ensure_target(unit_of_work_factory, studio_id, production_id)
    result = RosterImportResult()

    for row in rows:
        email = normalize_email(row.email)
        phone = normalize_phone(row.phone)
        if email is None and phone is None:
            result.errors.append(RosterRowError(row.row_number, "Email or phone is required"))
            continue
        try:
            _import_row(
                unit_of_work_factory,
                result,
                row,
                studio_id=studio_id,
                production_id=production_id,
                default_role=default_role,
                at=clock(),
            )
        except ValueError as exc:
            result.errors.append(RosterRowError(row.row_number, str(exc)))
        except ReconciliationError as exc:
            log.warning("Roster row %d not imported cleanly: %s", row.row_number, exc)
            result.errors.append(RosterRowError(row.row_number, str(exc)))

    log.info(
        "Roster import for studio %s: created=%d converted=%d duplicates=%d errors=%d",
        studio_id,
        result.imported,
        len(result.converted),
        result.duplicates,
        len(result.errors),
    )
    return result


def _ensure_target(
    unit_of_work_factory: UnitOfWorkFactory,
    studio_id: UUID,
    production_id: UUID | None,
) -> None:
    with unit_of_work_factory() as uow:
        if uow.repositories.studios.get(studio_id) is None:
            raise NotFoundError(EntityType.STUDIO, studio_id)
        if production_id is None:
            return
        production = uow.repositories.productions.get(production_id)
        if production is None or production.studio_id != studio_id:
            raise NotFoundError(EntityType.PRODUCTION, production_id)


def _import_row(
    unit_of_work_factory: UnitOfWorkFactory,
    result: RosterImportResult,
    row: RosterRow,
    *,
    studio_id: UUID,
    production_id: UUID | None,
    default_role: str,
    at: datetime,
) -> None:
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        entry = RosterEntry(
            studio_id=studio_id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            phone=row.phone,
            notes=row.notes,
        )
        if _is_duplicate(repositories, entry):
            result.duplicates += 1
            return

        if production_id is not None:
            entry.link_production(production_id)
        talent_id = _registered_talent(repositories, entry.email)
        if talent_id is not None:
            account_id, talent_record_id = talent_id
            entry.convert(talent_id=talent_record_id, account_id=account_id, at=at)

        repositories.roster_entries.add(entry)
        uow.commit()

    result.created.append(entry.id)
    if entry.converted_talent_id is None:
        return
    result.converted.append(entry.id)
    log.info("Roster entry %s matched registered talent %s", entry.id, entry.converted_talent_id)
    if production_id is not None:
        ensure_membership(
            unit_of_work_factory,
            talent_id=entry.converted_talent_id,
            target=MembershipTarget(
                production_id=production_id,
                role=default_role,
                notes=f"Converted from roster entry {entry.display_name}",
            ),
        )


def _is_duplicate(repositories: ReconciliationRepositories, entry: RosterEntry) -> bool:
    roster = repositories.roster_entries
    if entry.email is not None:
        return roster.find_in_studio_by_email(entry.studio_id, entry.email) is not None
    existing = roster.find_in_studio_by_name(
        entry.studio_id,
        first_name=entry.first_name,
        last_name=entry.last_name,
        phone=entry.phone,
    )
    return existing is not None


def _registered_talent(
    repositories: ReconciliationRepositories, email: str | None
) -> tuple[UUID, UUID] | None:
    if email is None:
        return None
    account = repositories.accounts.get_by_email(email)
    if account is None:
        return None
    talent = repositories.talent_records.get_by_account(account.id)
    if talent is None:
        return None
    return account.id, talent.id
