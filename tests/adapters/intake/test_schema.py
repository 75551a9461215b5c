from __future__ import annotations

import pytest
from pydantic import ValidationError

from castlink.adapters.intake.schema import LeadSubmissionPayload, RosterRowPayload


def test_lead_payload_accepts_camel_case_aliases() -> None:
    payload = LeadSubmissionPayload.model_validate(
        {
            "code": " NL-OPEN-CALL ",
            "firstName": " Ada ",
            "lastName": "Lane",
            "phoneNumber": "555 010 2030",
            "email": "",
            "message": "   ",
            "referrer": "newsletter",
        }
    )

    assert payload.code == "NL-OPEN-CALL"
    assert payload.first_name == "Ada"
    assert payload.email is None
    assert payload.phone == "555 010 2030"
    assert payload.message is None


def test_roster_row_requires_email_or_phone() -> None:
    with pytest.raises(ValidationError, match="Either email or phone is required"):
        RosterRowPayload.model_validate({"first_name": "Ada", "last_name": "Lane", "phone": " "})


@pytest.mark.parametrize(
    "data",
    [
        {"first_name": "  ", "last_name": "Lane", "email": "ada@example.com"},
        {"first_name": "Ada", "last_name": "Lane", "email": "not-an-email"},
        {"first_name": "Ada", "email": "ada@example.com"},
    ],
)
def test_roster_row_rejects_invalid_contact(data: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        RosterRowPayload.model_validate(data)


def test_payloads_are_frozen() -> None:
    payload = RosterRowPayload.model_validate(
        {"first_name": "Ada", "last_name": "Lane", "email": "ada@example.com"}
    )

    with pytest.raises(ValidationError):
        payload.first_name = "Bo"  # type: ignore[misc]


def test_lead_payload_needs_no_contact_details() -> None:
    payload = LeadSubmissionPayload.model_validate(
        {"code": "NL-OPEN-CALL", "first_name": "Ada", "last_name": "Lane"}
    )

    assert payload.email is None
    assert payload.phone is None
