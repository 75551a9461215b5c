from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from castlink.adapters.sqlalchemy.repositories import SqlAlchemyRosterEntryRepository
from castlink.domain.model import ConcurrentUpdateError, RosterStatus
from castlink.domain.reconciliation import ReconciliationEngine, ScanResult
from tests.helpers.records import (
    load_entry,
    memberships_for,
    register,
    seed_roster_entry,
    seed_studio,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from castlink.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


@pytest.mark.integration
def test_racing_scans_convert_each_entry_once(file_unit_of_work: UowFactory) -> None:
    studio, (pilot, finale) = seed_studio(file_unit_of_work, productions=("Pilot", "Finale"))
    first = seed_roster_entry(
        file_unit_of_work, studio, email="a@x.com", productions=(pilot, finale)
    )
    second = seed_roster_entry(
        file_unit_of_work,
        studio,
        first_name="Ada",
        last_name="Lane-Ortiz",
        phone="5550102030",
        productions=(pilot,),
    )
    registered = register(file_unit_of_work, email="a@x.com", phone="555 010 2030")
    engine = ReconciliationEngine(unit_of_work_factory=file_unit_of_work)

    barrier = threading.Barrier(2)
    results: list[ScanResult] = []
    errors: list[BaseException] = []
    lock = threading.Lock()

    def run_scan() -> None:
        barrier.wait()
        try:
            result = engine.scan_and_convert(
                registered.account.id, registered.talent.id, "a@x.com", "555 010 2030"
            )
        except BaseException as exc:  # noqa: BLE001
            with lock:
                errors.append(exc)
            return
        with lock:
            results.append(result)

    threads = [threading.Thread(target=run_scan) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert errors == []
    assert len(results) == 2
    converted = [c.roster_entry_id for result in results for c in result.conversions]
    assert sorted(converted) == sorted([first.id, second.id])

    for entry_id in (first.id, second.id):
        stored = load_entry(file_unit_of_work, entry_id)
        assert stored.status is RosterStatus.CONVERTED
        assert stored.converted_talent_id == registered.talent.id

    memberships = memberships_for(file_unit_of_work, registered.talent.id)
    assert sorted(str(m.production_id) for m in memberships) == sorted(
        [str(pilot.id), str(finale.id)]
    )


@pytest.mark.integration
def test_stale_read_loses_the_conversion_race(file_unit_of_work: UowFactory) -> None:
    studio, _ = seed_studio(file_unit_of_work, productions=())
    entry = seed_roster_entry(file_unit_of_work, studio, email="a@x.com")
    winner = register(file_unit_of_work, email="a@x.com")

    with file_unit_of_work() as slow:
        stale = slow.repositories.roster_entries.get(entry.id)
        assert stale is not None

        with file_unit_of_work() as fast:
            fresh = fast.repositories.roster_entries.get(entry.id, for_update=True)
            assert fresh is not None
            fresh.convert(talent_id=winner.talent.id, account_id=winner.account.id)
            fast.commit()

        stale.convert(talent_id=winner.talent.id, account_id=winner.account.id)
        with pytest.raises(ConcurrentUpdateError):
            slow.commit()

    assert load_entry(file_unit_of_work, entry.id).converted_talent_id == winner.talent.id


@pytest.mark.integration
def test_scan_skips_entry_converted_between_match_and_update(
    file_unit_of_work: UowFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    studio, _ = seed_studio(file_unit_of_work, productions=())
    entry = seed_roster_entry(file_unit_of_work, studio, email="a@x.com")
    registered = register(file_unit_of_work, email="a@x.com")
    original_get = SqlAlchemyRosterEntryRepository.get
    raced = False

    def racing_get(
        self: SqlAlchemyRosterEntryRepository, entity_id: object, *, for_update: bool = False
    ) -> object:
        nonlocal raced
        if for_update and not raced:
            raced = True
            with file_unit_of_work() as other:
                competitor = original_get(other.repositories.roster_entries, entry.id)
                assert competitor is not None
                competitor.convert(
                    talent_id=registered.talent.id, account_id=registered.account.id
                )
                other.commit()
        return original_get(self, entity_id, for_update=for_update)  # type: ignore[arg-type]

    monkeypatch.setattr(SqlAlchemyRosterEntryRepository, "get", racing_get)
    engine = ReconciliationEngine(unit_of_work_factory=file_unit_of_work)

    result = engine.scan_and_convert(registered.account.id, registered.talent.id, "a@x.com")

    assert result.matched == 1
    assert result.converted == 0
    assert result.skipped == [entry.id]
    assert result.issues == []
