"""Roster entry conversion shared by the direct and scan triggers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from castlink.domain.model import AlreadyConvertedError, ConcurrentUpdateError

from .contracts import ConversionOutcome
from .replay import MembershipTarget

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from castlink.domain.model import RosterEntry

    from .contracts import UnitOfWorkFactory

CONVERSION_ATTEMPTS = 2

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class RosterConversion:
    roster_entry_id: UUID
    outcome: ConversionOutcome
    studio_name: str | None = None
    targets: list[MembershipTarget] = field(default_factory=list["MembershipTarget"])


def membership_targets(entry: RosterEntry, *, default_role: str) -> list[MembershipTarget]:
    note = f"Converted from roster entry {entry.display_name}"
    return [
        MembershipTarget(
            production_id=link.production_id,
            role=link.role or default_role,
            notes=note,
        )
        for link in entry.production_links
    ]


def convert_roster_entry(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    entry_id: UUID,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
    default_role: str,
) -> RosterConversion:
    """Re-read the entry under lock and convert it if it is still ACTIVE.

    An entry found CONVERTED (by another trigger since matching) yields
    ``ALREADY_CONVERTED``. A version conflict on commit reads the entry again
    and decides from its current status.

    Raises:
        ConcurrentUpdateError: The row kept changing for every attempt.
        PersistenceError: Storage failure.
    """

    attempt = 1
    while True:
        try:
            return _convert_once(
                unit_of_work_factory,
                entry_id=entry_id,
                talent_id=talent_id,
                account_id=account_id,
                at=at,
                default_role=default_role,
            )
        except ConcurrentUpdateError:
            if attempt >= CONVERSION_ATTEMPTS:
                raise
            attempt += 1
            log.debug("Roster entry %s changed while converting; reading it again", entry_id)


def _convert_once(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    entry_id: UUID,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
    default_role: str,
) -> RosterConversion:
    with unit_of_work_factory() as uow:
        entry = uow.repositories.roster_entries.get(entry_id, for_update=True)
        if entry is None:
            return RosterConversion(roster_entry_id=entry_id, outcome=ConversionOutcome.NOT_FOUND)

        studio = uow.repositories.studios.get(entry.studio_id)
        conversion = RosterConversion(
            roster_entry_id=entry_id,
            outcome=ConversionOutcome.ALREADY_CONVERTED,
            studio_name=studio.name if studio is not None else None,
        )
        try:
            entry.convert(talent_id=talent_id, account_id=account_id, at=at)
        except AlreadyConvertedError:
            log.debug("Roster entry %s already converted; skipping", entry_id)
            return conversion

        targets = membership_targets(entry, default_role=default_role)
        uow.commit()

    log.info("Converted roster entry %s to talent %s", entry_id, talent_id)
    conversion.outcome = ConversionOutcome.CONVERTED
    conversion.targets = targets
    return conversion
