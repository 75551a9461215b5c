from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text

from castlink.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from castlink.domain.model import (
    ConstraintViolationError,
    Membership,
    PersistenceError,
    RosterEntry,
    RosterStatus,
)
from tests.helpers.records import register, seed_roster_entry, seed_studio

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


def test_startup_requires_force_to_reconfigure(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert is_started()
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError):
            startup(engine=sqlite_engine)
    finally:
        shutdown()

    assert not is_started()


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_repositories_require_an_open_session(sqlite_unit_of_work: UowFactory) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_converted_status_without_talent_is_refused(sqlite_unit_of_work: UowFactory) -> None:
    studio, _ = seed_studio(sqlite_unit_of_work, productions=())
    entry = RosterEntry(studio_id=studio.id, first_name="Ada", last_name="Lane")
    entry._status = RosterStatus.CONVERTED  # noqa: SLF001

    with sqlite_unit_of_work() as uow:
        uow.repositories.roster_entries.add(entry)
        with pytest.raises(ConstraintViolationError):
            uow.commit()


def test_duplicate_studio_email_is_refused(sqlite_unit_of_work: UowFactory) -> None:
    studio, _ = seed_studio(sqlite_unit_of_work, productions=())
    seed_roster_entry(sqlite_unit_of_work, studio, email="ada@example.com")

    with pytest.raises(ConstraintViolationError):
        seed_roster_entry(sqlite_unit_of_work, studio, first_name="Other", email="ada@example.com")


def test_duplicate_membership_is_refused(sqlite_unit_of_work: UowFactory) -> None:
    _, (production,) = seed_studio(sqlite_unit_of_work)
    registered = register(sqlite_unit_of_work, email="ada@example.com")

    def add_membership() -> None:
        with sqlite_unit_of_work() as uow:
            uow.repositories.memberships.add(
                Membership(
                    production_id=production.id,
                    talent_id=registered.talent.id,
                    role="Talent",
                )
            )
            uow.commit()

    add_membership()
    with pytest.raises(ConstraintViolationError):
        add_membership()


def test_driver_errors_surface_as_persistence_errors(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(PersistenceError), sqlite_unit_of_work() as uow:
        uow.session.execute(text("SELECT * FROM no_such_table"))


def test_uncommitted_work_is_rolled_back(sqlite_unit_of_work: UowFactory) -> None:
    studio, _ = seed_studio(sqlite_unit_of_work, productions=())
    entry = RosterEntry(studio_id=studio.id, first_name="Ada", last_name="Lane")

    with sqlite_unit_of_work() as uow:
        uow.repositories.roster_entries.add(entry)

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.roster_entries.get(entry.id) is None
