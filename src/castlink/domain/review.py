"""Studio review of lead submissions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from castlink.domain.model import EntityType, NotFoundError, SubmissionStatus

if TYPE_CHECKING:
    from uuid import UUID

    from castlink.domain.model import LeadSubmission
    from castlink.domain.reconciliation import UnitOfWorkFactory

log = logging.getLogger(__name__)

REVIEW_DECISIONS = frozenset({SubmissionStatus.APPROVED, SubmissionStatus.REJECTED})


def review_submission(
    submission_id: UUID,
    decision: SubmissionStatus,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> LeadSubmission:
    """Approve or reject a submission that has not been converted yet."""

    if decision not in REVIEW_DECISIONS:
        raise ValueError(f"Unsupported review decision: {decision}")

    with unit_of_work_factory() as uow:
        submission = uow.repositories.submissions.get(submission_id, for_update=True)
        if submission is None:
            raise NotFoundError(EntityType.LEAD_SUBMISSION, submission_id)
        if decision is SubmissionStatus.APPROVED:
            submission.approve()
        else:
            submission.reject()
        uow.commit()

    log.info("Lead submission %s reviewed: %s", submission_id, decision)
    return submission
