from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from castlink.domain.model import EntityType, NotFoundError, SubmissionStatus
from castlink.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


def test_scan_command_parses_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[tuple[object, ...]] = []
    account_id, talent_id = uuid4(), uuid4()

    def fake_scan(*args: object) -> SimpleNamespace:
        captured.append(args)
        return SimpleNamespace(message="nothing", conversions=[], issues=[])

    monkeypatch.setattr(cli_module, "scan_and_convert", fake_scan)

    cli_module.main(
        [
            "scan",
            "--account-id",
            str(account_id),
            "--talent-record-id",
            str(talent_id),
            "--email",
            "ada@example.com",
        ]
    )

    assert captured == [(account_id, talent_id, "ada@example.com", None)]


def test_import_roster_reads_csv_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}
    studio_id = uuid4()
    roster = tmp_path / "roster.csv"
    roster.write_text("first_name,last_name,email\nAda,Lane,ada@example.com\n", encoding="utf-8")

    def fake_import(studio: object, csv_text: str, **kwargs: object) -> SimpleNamespace:
        captured.update(studio=studio, csv_text=csv_text, **kwargs)
        return SimpleNamespace(imported=1, converted=[], duplicates=0, errors=[])

    monkeypatch.setattr(cli_module, "import_roster", fake_import)

    cli_module.main(["import-roster", "--studio-id", str(studio_id), "--file", str(roster)])

    assert captured["studio"] == studio_id
    assert captured["production_id"] is None
    assert "Ada,Lane" in str(captured["csv_text"])


def test_review_maps_decision(monkeypatch: pytest.MonkeyPatch) -> None:
    decisions: list[object] = []

    def fake_review(submission_id: object, decision: object) -> SimpleNamespace:
        decisions.append(decision)
        return SimpleNamespace(id=submission_id, status=decision)

    monkeypatch.setattr(cli_module, "review_submission", fake_review)

    cli_module.main(["review", "--submission-id", str(uuid4()), "--decision", "reject"])

    assert decisions == [SubmissionStatus.REJECTED]


def test_invalid_uuid_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["review", "--submission-id", "not-a-uuid", "--decision", "approve"])

    assert excinfo.value.code == 2


def test_domain_errors_exit_with_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    submission_id = uuid4()

    def fake_review(*_: object) -> None:
        raise NotFoundError(EntityType.LEAD_SUBMISSION, submission_id)

    monkeypatch.setattr(cli_module, "review_submission", fake_review)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["review", "--submission-id", str(submission_id), "--decision", "approve"])

    assert excinfo.value.code == 1


def test_missing_subcommand_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
