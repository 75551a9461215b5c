"""Registration-triggered conversion of one explicitly referenced lead submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from castlink.domain.model import (
    AlreadyConvertedError,
    ConcurrentUpdateError,
    EntityType,
    PersistenceError,
    TerminalStateConflictError,
    utcnow,
)

from .contracts import ConversionOutcome, ConversionResult, IssueKind, ReconciliationIssue
from .replay import DEFAULT_MEMBER_ROLE, MembershipTarget, replay_memberships
from .transitions import CONVERSION_ATTEMPTS, convert_roster_entry

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from .contracts import UnitOfWorkFactory

log = logging.getLogger(__name__)


@dataclass(slots=True)
class _SubmissionState:
    """What step 2 learned about the submission before (or despite) committing."""

    outcome: ConversionOutcome = ConversionOutcome.FAILED
    roster_entry_id: UUID | None = None
    production_id: UUID | None = None
    loaded: bool = False


def submission_target(submission_id: UUID, production_id: UUID, *, role: str) -> MembershipTarget:
    return MembershipTarget(
        production_id=production_id,
        role=role,
        notes=f"Converted from lead submission {submission_id}",
    )


def convert_from_submission(
    *,
    account_id: UUID,
    talent_record_id: UUID,
    submission_id: UUID,
    unit_of_work_factory: UnitOfWorkFactory,
    default_role: str = DEFAULT_MEMBER_ROLE,
    clock: Callable[[], datetime] = utcnow,
) -> ConversionResult:
    """Convert ``submission_id`` and everything it implies for a new talent record.

    Never raises for reconciliation trouble: the account already exists when
    this runs, so every failure past that point ends up on the returned
    result (and in the log) instead.
    """

    at = clock()
    result = ConversionResult(submission_id=submission_id, outcome=ConversionOutcome.FAILED)
    state = _SubmissionState()

    try:
        _convert_submission(
            unit_of_work_factory,
            state,
            submission_id=submission_id,
            talent_id=talent_record_id,
            account_id=account_id,
            at=at,
        )
    except (ConcurrentUpdateError, PersistenceError) as exc:
        log.exception("Could not convert lead submission %s", submission_id)
        result.issues.append(
            ReconciliationIssue(
                kind=IssueKind.PERSISTENCE_FAILURE,
                entity_type=EntityType.LEAD_SUBMISSION,
                entity_id=submission_id,
                detail=str(exc),
            )
        )
        if not state.loaded:
            return result

    result.outcome = state.outcome
    result.roster_entry_id = state.roster_entry_id
    match state.outcome:
        case ConversionOutcome.NOT_FOUND:
            log.info("Lead submission %s not found; nothing to convert", submission_id)
            return result
        case ConversionOutcome.ALREADY_CONVERTED:
            log.debug("Lead submission %s already converted", submission_id)
            return result
        case ConversionOutcome.REJECTED:
            log.warning(
                "Lead submission %s was rejected and will not be linked to account %s",
                submission_id,
                account_id,
            )
            result.issues.append(
                ReconciliationIssue(
                    kind=IssueKind.TERMINAL_STATE_CONFLICT,
                    entity_type=EntityType.LEAD_SUBMISSION,
                    entity_id=submission_id,
                    detail="rejected submissions cannot be converted",
                )
            )
            return result
        case _:
            pass

    if state.outcome is ConversionOutcome.CONVERTED:
        log.info("Converted lead submission %s to talent %s", submission_id, talent_record_id)

    entry_targets: list[MembershipTarget] = []
    if state.roster_entry_id is not None:
        entry_targets = _convert_referenced_entry(
            unit_of_work_factory,
            result,
            entry_id=state.roster_entry_id,
            talent_id=talent_record_id,
            account_id=account_id,
            at=at,
            default_role=default_role,
        )

    if state.production_id is not None:
        report = replay_memberships(
            unit_of_work_factory,
            talent_id=talent_record_id,
            targets=[submission_target(submission_id, state.production_id, role=default_role)],
            source_type=EntityType.LEAD_SUBMISSION,
            source_id=submission_id,
        )
        result.memberships_created.extend(report.created)
        result.issues.extend(report.issues)
        entry_targets = [t for t in entry_targets if t.production_id != state.production_id]

    if entry_targets and state.roster_entry_id is not None:
        report = replay_memberships(
            unit_of_work_factory,
            talent_id=talent_record_id,
            targets=entry_targets,
            source_type=EntityType.ROSTER_ENTRY,
            source_id=state.roster_entry_id,
        )
        result.memberships_created.extend(report.created)
        result.issues.extend(report.issues)

    return result


def _convert_submission(
    unit_of_work_factory: UnitOfWorkFactory,
    state: _SubmissionState,
    *,
    submission_id: UUID,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
) -> None:
    """Convert the submission, reading it again when a concurrent write wins.

    Each attempt decides from the status it reads: CONVERTED is a no-op,
    REJECTED a terminal conflict, PENDING or APPROVED are converted.

    Raises:
        ConcurrentUpdateError: The row kept changing for every attempt.
        PersistenceError: Storage failure.
    """

    attempt = 1
    while True:
        try:
            _convert_submission_once(
                unit_of_work_factory,
                state,
                submission_id=submission_id,
                talent_id=talent_id,
                account_id=account_id,
                at=at,
            )
        except ConcurrentUpdateError:
            if attempt >= CONVERSION_ATTEMPTS:
                raise
            attempt += 1
            log.debug(
                "Lead submission %s changed while converting; reading it again", submission_id
            )
            continue
        return


def _convert_submission_once(
    unit_of_work_factory: UnitOfWorkFactory,
    state: _SubmissionState,
    *,
    submission_id: UUID,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
) -> None:
    with unit_of_work_factory() as uow:
        submission = uow.repositories.submissions.get(submission_id, for_update=True)
        if submission is None:
            state.outcome = ConversionOutcome.NOT_FOUND
            return
        state.loaded = True
        state.roster_entry_id = submission.roster_entry_id
        code = uow.repositories.codes.get(submission.code_id)
        if code is not None:
            state.production_id = code.production_id

        try:
            submission.convert(talent_id=talent_id, account_id=account_id, at=at)
        except AlreadyConvertedError:
            state.outcome = ConversionOutcome.ALREADY_CONVERTED
            return
        except TerminalStateConflictError:
            state.outcome = ConversionOutcome.REJECTED
            return

        uow.commit()
    state.outcome = ConversionOutcome.CONVERTED


def _convert_referenced_entry(
    unit_of_work_factory: UnitOfWorkFactory,
    result: ConversionResult,
    *,
    entry_id: UUID,
    talent_id: UUID,
    account_id: UUID,
    at: datetime,
    default_role: str,
) -> list[MembershipTarget]:
    try:
        conversion = convert_roster_entry(
            unit_of_work_factory,
            entry_id=entry_id,
            talent_id=talent_id,
            account_id=account_id,
            at=at,
            default_role=default_role,
        )
    except (ConcurrentUpdateError, PersistenceError) as exc:
        log.exception("Could not convert roster entry %s", entry_id)
        result.roster_entry_outcome = ConversionOutcome.FAILED
        result.issues.append(
            ReconciliationIssue(
                kind=IssueKind.PERSISTENCE_FAILURE,
                entity_type=EntityType.ROSTER_ENTRY,
                entity_id=entry_id,
                detail=str(exc),
            )
        )
        return []

    result.roster_entry_outcome = conversion.outcome
    if conversion.outcome is ConversionOutcome.NOT_FOUND:
        result.issues.append(
            ReconciliationIssue(
                kind=IssueKind.NOT_FOUND,
                entity_type=EntityType.ROSTER_ENTRY,
                entity_id=entry_id,
                detail="roster entry referenced by the submission does not exist",
            )
        )
    return conversion.targets
