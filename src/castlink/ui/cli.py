from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv
from pydantic import ValidationError

from castlink.app import (
    convert_from_submission,
    import_roster,
    init_db,
    review_submission,
    scan_and_convert,
    submit_lead,
)
from castlink.config import ConfigurationError, configure_logging, get_log_level
from castlink.domain.model import ReconciliationError, SubmissionStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from castlink.domain.reconciliation import ReconciliationIssue

log = logging.getLogger(__name__)

_DECISIONS = {
    "approve": SubmissionStatus.APPROVED,
    "reject": SubmissionStatus.REJECTED,
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile roster records with registered talent")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init-db", help="Create or upgrade the database schema")
    init.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy URL to use instead of DATABASE_URI / the default SQLite file",
    )

    convert = subparsers.add_parser(
        "convert-submission",
        help="Link the lead submission used at registration to a new talent record",
    )
    convert.add_argument("--account-id", type=str, required=True, help="Registered account id")
    convert.add_argument("--talent-record-id", type=str, required=True, help="Talent record id")
    convert.add_argument("--submission-id", type=str, required=True, help="Lead submission id")

    scan = subparsers.add_parser(
        "scan",
        help="Convert every roster entry matching the account's email or phone",
    )
    scan.add_argument("--account-id", type=str, required=True, help="Registered account id")
    scan.add_argument("--talent-record-id", type=str, required=True, help="Talent record id")
    scan.add_argument("--email", type=str, required=True, help="Account email address")
    scan.add_argument("--phone", type=str, help="Account phone number, if on file")

    lead = subparsers.add_parser("submit-lead", help="Submit a guest application via a code")
    lead.add_argument("--code", type=str, required=True, help="Shareable code")
    lead.add_argument("--first-name", type=str, required=True)
    lead.add_argument("--last-name", type=str, required=True)
    lead.add_argument("--email", type=str)
    lead.add_argument("--phone", type=str)
    lead.add_argument("--message", type=str)

    roster = subparsers.add_parser("import-roster", help="Import a studio roster from CSV")
    roster.add_argument("--studio-id", type=str, required=True, help="Studio receiving the rows")
    roster.add_argument(
        "--file",
        type=str,
        required=True,
        help="CSV file with a header row ('-' reads standard input)",
    )
    roster.add_argument(
        "--production-id",
        type=str,
        help="Optional production every imported entry is linked to",
    )

    review = subparsers.add_parser("review", help="Approve or reject a lead submission")
    review.add_argument("--submission-id", type=str, required=True, help="Lead submission id")
    review.add_argument("--decision", choices=sorted(_DECISIONS), required=True)

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _read_csv(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _log_issues(issues: Sequence[ReconciliationIssue]) -> None:
    for issue in issues:
        log.warning(
            "%s on %s %s: %s", issue.kind, issue.entity_type, issue.entity_id, issue.detail
        )


def _run(args: argparse.Namespace) -> None:
    if args.command == "init-db":
        init_db(database_uri=args.database_uri)
    elif args.command == "convert-submission":
        result = convert_from_submission(
            _parse_uuid(args.account_id),
            _parse_uuid(args.talent_record_id),
            _parse_uuid(args.submission_id),
        )
        log.info("%s (outcome=%s)", result.message, result.outcome)
        _log_issues(result.issues)
    elif args.command == "scan":
        scan_result = scan_and_convert(
            _parse_uuid(args.account_id),
            _parse_uuid(args.talent_record_id),
            args.email,
            args.phone,
        )
        log.info(scan_result.message)
        for conversion in scan_result.conversions:
            log.info(
                "  %s (%s): %d productions, %d new memberships",
                conversion.roster_entry_id,
                conversion.studio_name,
                conversion.productions,
                conversion.memberships_created,
            )
        _log_issues(scan_result.issues)
    elif args.command == "submit-lead":
        submission = submit_lead(
            {
                "code": args.code,
                "first_name": args.first_name,
                "last_name": args.last_name,
                "email": args.email,
                "phone": args.phone,
                "message": args.message,
            }
        )
        log.info("Created lead submission %s", submission.id)
    elif args.command == "import-roster":
        production_id = _parse_uuid(args.production_id) if args.production_id else None
        report = import_roster(
            _parse_uuid(args.studio_id),
            _read_csv(args.file),
            production_id=production_id,
        )
        log.info(
            "Imported %d roster entries (%d already registered, %d duplicates, %d errors)",
            report.imported,
            len(report.converted),
            report.duplicates,
            len(report.errors),
        )
        for error in report.errors:
            log.warning("Row %d: %s", error.row_number, error.message)
    elif args.command == "review":
        submission = review_submission(_parse_uuid(args.submission_id), _DECISIONS[args.decision])
        log.info("Lead submission %s is now %s", submission.id, submission.status)
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging(level=get_log_level())
    except ConfigurationError:
        configure_logging()
        log.exception("Invalid logging configuration")
        sys.exit(2)

    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except (ValueError, ValidationError) as exc:
        log.error("Invalid input: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except ReconciliationError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
