"""Pydantic models describing inbound lead and roster payloads."""

from __future__ import annotations

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class IntakeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ContactPayload(IntakeBaseModel):
    first_name: str = Field(
        min_length=1, validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: str = Field(min_length=1, validation_alias=AliasChoices("last_name", "lastName"))
    email: EmailStr | None = None
    phone: str | None = Field(
        default=None, validation_alias=AliasChoices("phone", "phoneNumber", "phone_number")
    )

    _normalize_names = field_validator("first_name", "last_name", mode="before")(_strip)
    _normalize_optional = field_validator("email", "phone", mode="before")(_blank_to_none)


class LeadSubmissionPayload(ContactPayload):
    """A guest application posted against a shareable code."""

    code: str = Field(min_length=1)
    message: str | None = None

    _normalize_code = field_validator("code", mode="before")(_strip)
    _normalize_message = field_validator("message", mode="before")(_blank_to_none)


class RosterRowPayload(ContactPayload):
    """A roster row; the studio must be able to reach the person."""

    notes: str | None = None

    _normalize_notes = field_validator("notes", mode="before")(_blank_to_none)

    @model_validator(mode="after")
    def _require_contact(self) -> RosterRowPayload:
        if self.email is None and self.phone is None:
            raise ValueError("Either email or phone is required")
        return self
