from __future__ import annotations

import pytest
from pydantic import ValidationError

from castlink.adapters.intake import parse_lead, parse_roster_csv
from castlink.domain.intake import LeadSubmissionRequest


def test_parse_lead_builds_domain_request() -> None:
    request = parse_lead(
        {
            "code": "NL-OPEN-CALL",
            "first_name": "Ada",
            "last_name": "Lane",
            "email": "ada@example.com",
        }
    )

    assert request == LeadSubmissionRequest(
        code="NL-OPEN-CALL",
        first_name="Ada",
        last_name="Lane",
        email="ada@example.com",
    )


def test_parse_lead_requires_code() -> None:
    with pytest.raises(ValidationError):
        parse_lead({"first_name": "Ada", "last_name": "Lane", "email": "ada@example.com"})


def test_parse_roster_csv_numbers_rows_from_one() -> None:
    text = """
first_name, lastName, email, phoneNumber, notes
Ada, Lane, ada@example.com, , Lead in spring showcase
Bo, Ray, , ,
Cy, Ng, , 555-010-2030,
"""

    parsed = parse_roster_csv(text)

    assert [(row.row_number, row.first_name) for row in parsed.rows] == [(1, "Ada"), (3, "Cy")]
    assert parsed.rows[0].notes == "Lead in spring showcase"
    assert parsed.rows[0].phone is None
    assert parsed.rows[1].phone == "555-010-2030"
    (error,) = parsed.errors
    assert error.row_number == 2
    assert "Either email or phone is required" in error.message


def test_parse_roster_csv_reports_field_locations() -> None:
    parsed = parse_roster_csv("first_name,last_name,email\nAda,,ada@example.com\n")

    assert parsed.rows == []
    (error,) = parsed.errors
    assert error.message.startswith("last_name:")
