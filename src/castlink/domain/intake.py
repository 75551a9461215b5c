"""Capture of anonymous lead submissions through a studio's shareable code."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from castlink.domain.model import (
    EntityType,
    LeadSubmission,
    NotFoundError,
    RosterEntry,
    normalize_email,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from castlink.domain.model import ShareableCode
    from castlink.domain.ports import ReconciliationRepositories
    from castlink.domain.reconciliation import UnitOfWorkFactory

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class LeadSubmissionRequest:
    code: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    message: str | None = None


def submit_lead(
    request: LeadSubmissionRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    clock: Callable[[], datetime] = utcnow,
) -> LeadSubmission:
    """Record a guest application and attach it to the studio's roster.

    The guest is recognised as an existing roster member of the code's studio
    by email, then by first and last name; otherwise a new ACTIVE roster entry
    is created. The submission always points at that entry.

    Raises:
        NotFoundError: No shareable code matches ``request.code``.
        CodeUnavailableError: The code is inactive or expired.
    """

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        code = repositories.codes.get_by_code(request.code.strip())
        if code is None:
            raise NotFoundError(EntityType.SHAREABLE_CODE, request.code)
        code.ensure_accepting(clock())

        entry = _resolve_roster_entry(repositories, code, request)
        if code.production_id is not None and not entry.is_converted:
            entry.link_production(code.production_id, notes=f"Submitted via code {code.code}")

        submission = LeadSubmission(
            code_id=code.id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
            message=request.message,
            roster_entry_id=entry.id,
        )
        repositories.submissions.add(submission)
        uow.commit()

    log.info(
        "Recorded lead submission %s via code %s (roster entry %s)",
        submission.id,
        code.code,
        entry.id,
    )
    return submission


def _resolve_roster_entry(
    repositories: ReconciliationRepositories,
    code: ShareableCode,
    request: LeadSubmissionRequest,
) -> RosterEntry:
    roster = repositories.roster_entries
    email = normalize_email(request.email)

    entry = roster.find_in_studio_by_email(code.studio_id, email) if email else None
    if entry is None:
        entry = roster.find_in_studio_by_name(
            code.studio_id,
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
        )

    if entry is None:
        entry = RosterEntry(
            studio_id=code.studio_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
            notes=f"Created from a submission via code {code.code}",
        )
        roster.add(entry)
        log.debug("Created roster entry %s in studio %s", entry.id, code.studio_id)
        return entry

    if entry.is_converted:
        log.debug("Roster entry %s is already converted; referencing it unchanged", entry.id)
        return entry

    entry.update_contact(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone=request.phone,
    )
    return entry
