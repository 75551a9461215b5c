"""Guest applies, registers, and picks up every prior record across studios."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from castlink import app
from castlink.domain.model import RosterStatus, SubmissionStatus
from castlink.domain.reconciliation import ConversionOutcome
from tests.helpers.records import (
    load_entry,
    load_submission,
    memberships_for,
    register,
    seed_code,
    seed_roster_entry,
    seed_studio,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from castlink.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


@pytest.mark.integration
def test_submission_then_registration_then_scan(sqlite_unit_of_work: UowFactory) -> None:
    northlight, (open_call, showcase) = seed_studio(
        sqlite_unit_of_work, productions=("Open Call", "Spring Showcase")
    )
    harbor, (season,) = seed_studio(sqlite_unit_of_work, "Harbor Talent", ("Summer Season",))
    seed_code(sqlite_unit_of_work, northlight, open_call)
    on_roster = seed_roster_entry(
        sqlite_unit_of_work,
        northlight,
        email="ada@example.com",
        productions=[showcase],
        role="Lead",
    )
    elsewhere = seed_roster_entry(
        sqlite_unit_of_work, harbor, email="ADA@example.com", productions=[season]
    )

    submission = app.submit_lead(
        {
            "code": "NL-OPEN-CALL",
            "firstName": "Ada",
            "lastName": "Lane",
            "email": "ada@example.com",
        },
        unit_of_work_factory=sqlite_unit_of_work,
    )
    assert submission.roster_entry_id == on_roster.id

    registered = register(sqlite_unit_of_work, email="ada@example.com")
    direct = app.convert_from_submission(
        registered.account.id,
        registered.talent.id,
        submission.id,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert direct.outcome is ConversionOutcome.CONVERTED
    assert direct.roster_entry_outcome is ConversionOutcome.CONVERTED
    assert len(direct.memberships_created) == 2
    assert direct.issues == []
    assert load_submission(sqlite_unit_of_work, submission.id).status is SubmissionStatus.CONVERTED

    scan = app.scan_and_convert(
        registered.account.id,
        registered.talent.id,
        "ada@example.com",
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert scan.matched == 1
    (conversion,) = scan.conversions
    assert conversion.roster_entry_id == elsewhere.id
    assert conversion.studio_name == "Harbor Talent"
    assert conversion.memberships_created == 1
    assert load_entry(sqlite_unit_of_work, elsewhere.id).status is RosterStatus.CONVERTED

    roles = {
        membership.production_id: membership.role
        for membership in memberships_for(sqlite_unit_of_work, registered.talent.id)
    }
    assert roles == {open_call.id: "Talent", showcase.id: "Lead", season.id: "Talent"}

    repeat = app.scan_and_convert(
        registered.account.id,
        registered.talent.id,
        "ada@example.com",
        unit_of_work_factory=sqlite_unit_of_work,
    )
    assert repeat.nothing_to_convert
    assert repeat.memberships_restored == 0
    assert repeat.message == "No roster records found matching your email"
