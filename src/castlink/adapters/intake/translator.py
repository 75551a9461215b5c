"""Translate inbound intake payloads into domain requests."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from castlink.domain.intake import LeadSubmissionRequest
from castlink.domain.roster import RosterRow, RosterRowError

from .schema import LeadSubmissionPayload, RosterRowPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


@dataclass(slots=True)
class ParsedRoster:
    rows: list[RosterRow] = field(default_factory=list["RosterRow"])
    errors: list[RosterRowError] = field(default_factory=list["RosterRowError"])


def translate_lead(payload: LeadSubmissionPayload) -> LeadSubmissionRequest:
    return LeadSubmissionRequest(
        code=payload.code,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=str(payload.email) if payload.email is not None else None,
        phone=payload.phone,
        message=payload.message,
    )


def parse_lead(data: Mapping[str, object]) -> LeadSubmissionRequest:
    """Validate a raw lead payload; raises ``pydantic.ValidationError``."""

    return translate_lead(LeadSubmissionPayload.model_validate(data))


def translate_roster_row(row_number: int, payload: RosterRowPayload) -> RosterRow:
    return RosterRow(
        row_number=row_number,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=str(payload.email) if payload.email is not None else None,
        phone=payload.phone,
        notes=payload.notes,
    )


def parse_roster_csv(text: str) -> ParsedRoster:
    """Parse roster CSV text with a header row.

    Accepts ``first_name``/``firstName``, ``last_name``/``lastName``, ``email``,
    ``phone``/``phoneNumber`` and ``notes`` columns. Rows are numbered from 1
    (the first data row); invalid rows become errors instead of aborting.
    """

    parsed = ParsedRoster()
    reader = csv.DictReader(io.StringIO(text.strip()), skipinitialspace=True)
    for row_number, raw in enumerate(reader, start=1):
        record = {key.strip(): value for key, value in raw.items() if key is not None}
        try:
            payload = RosterRowPayload.model_validate(record)
        except ValidationError as exc:
            parsed.errors.append(RosterRowError(row_number, _describe(exc)))
            continue
        parsed.rows.append(translate_roster_row(row_number, payload))
    log.debug("Parsed %d roster rows (%d invalid)", len(parsed.rows), len(parsed.errors))
    return parsed


def _describe(error: ValidationError) -> str:
    messages: list[str] = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(messages)
