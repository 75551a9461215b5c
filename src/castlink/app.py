"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from castlink.adapters.intake import parse_lead, parse_roster_csv
from castlink.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    configured_engine,
    is_started,
    startup,
)
from castlink.config import get_reconciliation_config
from castlink.domain.intake import LeadSubmissionRequest
from castlink.domain.intake import submit_lead as submit_lead_request
from castlink.domain.reconciliation import ReconciliationEngine
from castlink.domain.review import review_submission as review_submission_decision
from castlink.domain.roster import RosterImportResult
from castlink.domain.roster import import_roster as import_roster_rows

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from castlink.domain.model import LeadSubmission, SubmissionStatus
    from castlink.domain.reconciliation import ConversionResult, ScanResult, UnitOfWorkFactory


log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def build_engine(unit_of_work_factory: UnitOfWorkFactory | None = None) -> ReconciliationEngine:
    """Return a reconciliation engine wired to the configured storage."""

    config = get_reconciliation_config()
    return ReconciliationEngine(
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        default_member_role=config.default_member_role,
    )


def init_db(*, database_uri: str | None = None) -> str:
    """Create or upgrade the schema and return the database URL in use."""

    if not is_started():
        startup(database_uri=database_uri)
    engine = configured_engine()
    if engine is None:
        raise RuntimeError("Storage adapter did not start")
    url = engine.url.render_as_string(hide_password=True)
    log.info("Database ready at %s", url)
    return url


def convert_from_submission(
    account_id: UUID,
    talent_record_id: UUID,
    submission_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ConversionResult:
    """Link the lead submission used at registration to the new talent record."""

    engine = build_engine(unit_of_work_factory)
    result = engine.convert_from_submission(account_id, talent_record_id, submission_id)
    log.info(
        "Submission conversion finished: submission=%s outcome=%s memberships=%d issues=%d",
        submission_id,
        result.outcome,
        len(result.memberships_created),
        len(result.issues),
    )
    return result


def scan_and_convert(
    account_id: UUID,
    talent_record_id: UUID,
    email: str,
    phone: str | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ScanResult:
    """Find and link every prior roster record of the account across studios."""

    engine = build_engine(unit_of_work_factory)
    return engine.scan_and_convert(account_id, talent_record_id, email, phone)


def submit_lead(
    payload: Mapping[str, object] | LeadSubmissionRequest,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> LeadSubmission:
    """Record a guest application; raw payloads are validated first."""

    request = payload if isinstance(payload, LeadSubmissionRequest) else parse_lead(payload)
    return submit_lead_request(
        request,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
    )


def import_roster(
    studio_id: UUID,
    csv_text: str,
    *,
    production_id: UUID | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> RosterImportResult:
    """Import roster CSV text into ``studio_id``; invalid rows are reported, not raised."""

    parsed = parse_roster_csv(csv_text)
    result = import_roster_rows(
        studio_id,
        parsed.rows,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
        production_id=production_id,
        default_role=get_reconciliation_config().default_member_role,
    )
    result.errors = sorted([*parsed.errors, *result.errors], key=lambda error: error.row_number)
    return result


def review_submission(
    submission_id: UUID,
    decision: SubmissionStatus,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> LeadSubmission:
    return review_submission_decision(
        submission_id,
        decision,
        unit_of_work_factory=_unit_of_work_factory(unit_of_work_factory),
    )
