"""Identity-triggered conversion of every roster entry matching an account."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from castlink.domain.model import (
    ConcurrentUpdateError,
    EntityType,
    NotFoundError,
    PersistenceError,
    utcnow,
)

from .contracts import (
    ConversionOutcome,
    EntryConversion,
    IssueKind,
    ReconciliationIssue,
    ScanResult,
)
from .direct import submission_target
from .matching import MatchCriteria, find_candidates
from .replay import DEFAULT_MEMBER_ROLE, MembershipTarget, replay_memberships
from .transitions import convert_roster_entry, membership_targets

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from castlink.domain.model import RosterEntry
    from castlink.domain.ports import ReconciliationRepositories

    from .contracts import UnitOfWorkFactory

log = logging.getLogger(__name__)


def scan_and_convert(
    *,
    account_id: UUID,
    talent_record_id: UUID,
    email: str,
    phone: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory,
    default_role: str = DEFAULT_MEMBER_ROLE,
    clock: Callable[[], datetime] = utcnow,
) -> ScanResult:
    """Convert all ACTIVE roster entries matching ``email`` (or ``phone``) across studios.

    Each entry is converted in its own transaction and its production links
    are replayed afterwards, one membership per transaction. Memberships that
    earlier conversions of this talent record failed to create are restored on
    the way, which makes a repeated scan the retry path for partial failures.

    Raises:
        NotFoundError: The talent record does not exist or belongs to another account.
        ValueError: ``email`` is blank.
    """

    criteria = MatchCriteria.build(email, phone)

    with unit_of_work_factory() as uow:
        talent = uow.repositories.talent_records.get(talent_record_id)
        if talent is None or talent.account_id != account_id:
            raise NotFoundError(EntityType.TALENT_RECORD, talent_record_id)
        candidates = find_candidates(uow.repositories.roster_entries, criteria)
        pending_repairs = _previously_converted_targets(
            uow.repositories, talent_record_id, default_role=default_role
        )

    result = ScanResult(matched=len(candidates), phone_checked=criteria.phone is not None)
    at = clock()

    for candidate in candidates:
        _convert_candidate(
            unit_of_work_factory,
            result,
            candidate,
            talent_id=talent_record_id,
            account_id=account_id,
            at=at,
            default_role=default_role,
        )

    for source_type, source_id, targets in pending_repairs:
        report = replay_memberships(
            unit_of_work_factory,
            talent_id=talent_record_id,
            targets=targets,
            source_type=source_type,
            source_id=source_id,
        )
        result.memberships_restored += len(report.created)
        result.issues.extend(report.issues)

    log.info(
        "Scan for talent %s: matched=%d converted=%d skipped=%d restored=%d issues=%d",
        talent_record_id,
        result.matched,
        result.converted,
        len(result.skipped),
        result.memberships_restored,
        len(result.issues),
    )
    return result


def _convert_candidate(
    unit_of_work_factory: UnitOfWorkFactory,
    result: ScanResult,
    candidate: RosterEntry,
    *,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
    default_role: str,
) -> None:
    try:
        conversion = convert_roster_entry(
            unit_of_work_factory,
            entry_id=candidate.id,
            talent_id=talent_id,
            account_id=account_id,
            at=at,
            default_role=default_role,
        )
    except (ConcurrentUpdateError, PersistenceError) as exc:
        log.exception("Could not convert roster entry %s", candidate.id)
        result.issues.append(
            ReconciliationIssue(
                kind=IssueKind.PERSISTENCE_FAILURE,
                entity_type=EntityType.ROSTER_ENTRY,
                entity_id=candidate.id,
                detail=str(exc),
            )
        )
        return

    if conversion.outcome is not ConversionOutcome.CONVERTED:
        result.skipped.append(candidate.id)
        return

    report = replay_memberships(
        unit_of_work_factory,
        talent_id=talent_id,
        targets=conversion.targets,
        source_type=EntityType.ROSTER_ENTRY,
        source_id=candidate.id,
    )
    result.issues.extend(report.issues)
    result.conversions.append(
        EntryConversion(
            roster_entry_id=candidate.id,
            studio_id=candidate.studio_id,
            studio_name=conversion.studio_name or "",
            productions=len(conversion.targets),
            memberships_created=len(report.created),
        )
    )


def _previously_converted_targets(
    repositories: ReconciliationRepositories,
    talent_id: UUID,
    *,
    default_role: str,
) -> list[tuple[EntityType, UUID, list[MembershipTarget]]]:
    """Membership targets implied by shadow records already linked to ``talent_id``.

    Only targets whose membership is missing are returned.
    """

    pending: list[tuple[EntityType, UUID, list[MembershipTarget]]] = []
    memberships = repositories.memberships

    for entry in repositories.roster_entries.list_converted_to(talent_id):
        targets = [
            target
            for target in membership_targets(entry, default_role=default_role)
            if not memberships.exists(production_id=target.production_id, talent_id=talent_id)
        ]
        if targets:
            pending.append((EntityType.ROSTER_ENTRY, entry.id, targets))

    for submission in repositories.submissions.list_converted_to(talent_id):
        code = repositories.codes.get(submission.code_id)
        if code is None or code.production_id is None:
            continue
        if memberships.exists(production_id=code.production_id, talent_id=talent_id):
            continue
        target = submission_target(submission.id, code.production_id, role=default_role)
        pending.append((EntityType.LEAD_SUBMISSION, submission.id, [target]))

    return pending
