from __future__ import annotations

from typing import TYPE_CHECKING

from castlink.adapters.sqlalchemy.repositories import SqlAlchemyMembershipRepository
from castlink.domain.model import EntityType
from castlink.domain.reconciliation import (
    MembershipTarget,
    ReplayOutcome,
    ensure_membership,
    replay_memberships,
)
from tests.helpers.records import memberships_for, register, seed_studio

if TYPE_CHECKING:
    from collections.abc import Callable

    import pytest

    from castlink.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


def test_existing_membership_is_left_untouched(sqlite_unit_of_work: UowFactory) -> None:
    _, (production,) = seed_studio(sqlite_unit_of_work)
    registered = register(sqlite_unit_of_work, email="a@x.com")
    target = MembershipTarget(production_id=production.id, role="Lead", notes="first")

    assert (
        ensure_membership(sqlite_unit_of_work, talent_id=registered.talent.id, target=target)
        is ReplayOutcome.CREATED
    )
    again = MembershipTarget(production_id=production.id, role="Talent", notes="second")
    assert (
        ensure_membership(sqlite_unit_of_work, talent_id=registered.talent.id, target=again)
        is ReplayOutcome.EXISTING
    )

    (membership,) = memberships_for(sqlite_unit_of_work, registered.talent.id)
    assert (membership.role, membership.notes) == ("Lead", "first")


def test_unique_constraint_backstops_a_racing_existence_check(
    sqlite_unit_of_work: UowFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _, (production,) = seed_studio(sqlite_unit_of_work)
    registered = register(sqlite_unit_of_work, email="a@x.com")
    target = MembershipTarget(production_id=production.id, role="Talent")

    # every caller believes the membership is missing, as two racing triggers would
    monkeypatch.setattr(
        SqlAlchemyMembershipRepository, "exists", lambda *_args, **_kwargs: False
    )

    first = ensure_membership(sqlite_unit_of_work, talent_id=registered.talent.id, target=target)
    second = ensure_membership(sqlite_unit_of_work, talent_id=registered.talent.id, target=target)

    assert first is ReplayOutcome.CREATED
    assert second is ReplayOutcome.EXISTING
    assert len(memberships_for(sqlite_unit_of_work, registered.talent.id)) == 1


def test_replay_deduplicates_targets_by_production(sqlite_unit_of_work: UowFactory) -> None:
    _, (pilot, finale) = seed_studio(sqlite_unit_of_work, productions=("Pilot", "Finale"))
    registered = register(sqlite_unit_of_work, email="a@x.com")
    source_id = registered.talent.id

    report = replay_memberships(
        sqlite_unit_of_work,
        talent_id=registered.talent.id,
        targets=[
            MembershipTarget(production_id=pilot.id, role="Lead"),
            MembershipTarget(production_id=pilot.id, role="Extra"),
            MembershipTarget(production_id=finale.id, role="Talent"),
        ],
        source_type=EntityType.ROSTER_ENTRY,
        source_id=source_id,
    )

    assert report.created == [pilot.id, finale.id]
    assert report.existing == []
    assert report.issues == []
