"""Pre-registration shadow records.

A roster entry is a studio's record of talent who has no platform account yet;
a lead submission is an anonymous application captured through a shareable
code. Both are one-way state machines: status only changes through the methods
below, and conversion stamps the talent/account linkage in the same step so a
converted record never lacks it (and an unconverted one never carries it).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .entity import Entity
from .enums import EntityType, RosterStatus, SubmissionStatus
from .errors import AlreadyConvertedError, TerminalStateConflictError
from .primitives import normalize_email, normalize_phone, utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


def _require_name(first_name: str, last_name: str) -> tuple[str, str]:
    first, last = first_name.strip(), last_name.strip()
    if not first or not last:
        raise ValueError("First and last name are required")
    return first, last


@dataclass(eq=False, kw_only=True)
class RosterProduction(Entity):
    """Link between a roster entry and a production it was cast on."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ROSTER_PRODUCTION

    roster_entry_id: UUID
    production_id: UUID
    role: str | None = None
    notes: str | None = None


@dataclass(eq=False, kw_only=True)
class RosterEntry(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ROSTER_ENTRY

    studio_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    _status: RosterStatus = field(default=RosterStatus.ACTIVE, init=False)
    _converted_talent_id: UUID | None = field(default=None, init=False)
    _converted_account_id: UUID | None = field(default=None, init=False)
    _converted_at: datetime | None = field(default=None, init=False)

    _production_links: list[RosterProduction] = field(
        default_factory=list["RosterProduction"], init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.first_name, self.last_name = _require_name(self.first_name, self.last_name)
        self.email = normalize_email(self.email)
        self.phone = normalize_phone(self.phone)

    @property
    def status(self) -> RosterStatus:
        return self._status

    @property
    def is_converted(self) -> bool:
        return self._status is RosterStatus.CONVERTED

    @property
    def converted_talent_id(self) -> UUID | None:
        return self._converted_talent_id

    @property
    def converted_account_id(self) -> UUID | None:
        return self._converted_account_id

    @property
    def converted_at(self) -> datetime | None:
        return self._converted_at

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def production_links(self) -> tuple[RosterProduction, ...]:
        return tuple(self._production_links)

    def convert(self, *, talent_id: UUID, account_id: UUID, at: datetime | None = None) -> None:
        """ACTIVE -> CONVERTED. There is no way back."""
        if self.is_converted:
            raise AlreadyConvertedError(f"Roster entry {self.id} is already converted")
        self._status = RosterStatus.CONVERTED
        self._converted_talent_id = talent_id
        self._converted_account_id = account_id
        self._converted_at = at or utcnow()

    def update_contact(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> None:
        """Refresh identity fields; blank email/phone keep the stored value."""
        if self.is_converted:
            raise AlreadyConvertedError(
                f"Roster entry {self.id} is converted; its identity fields are history"
            )
        self.first_name, self.last_name = _require_name(first_name, last_name)
        self.email = normalize_email(email) or self.email
        self.phone = normalize_phone(phone) or self.phone

    def link_production(
        self,
        production_id: UUID,
        *,
        role: str | None = None,
        notes: str | None = None,
    ) -> RosterProduction:
        """Associate the entry with a production; an existing link is returned as-is."""
        for link in self._production_links:
            if link.production_id == production_id:
                return link
        link = RosterProduction(
            roster_entry_id=self.id,
            production_id=production_id,
            role=role,
            notes=notes,
        )
        self._production_links.append(link)
        return link


@dataclass(eq=False, kw_only=True)
class LeadSubmission(Entity):
    """Guest application through a shareable code.

    PENDING -> APPROVED | REJECTED by studio review; PENDING | APPROVED ->
    CONVERTED by the reconciliation engine. REJECTED is never converted and
    CONVERTED is final.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.LEAD_SUBMISSION

    code_id: UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    message: str | None = None
    roster_entry_id: UUID | None = None
    created_at: datetime = field(default_factory=utcnow)

    _status: SubmissionStatus = field(default=SubmissionStatus.PENDING, init=False)
    _converted_talent_id: UUID | None = field(default=None, init=False)
    _converted_account_id: UUID | None = field(default=None, init=False)
    _converted_at: datetime | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.first_name, self.last_name = _require_name(self.first_name, self.last_name)
        self.email = normalize_email(self.email)
        self.phone = normalize_phone(self.phone)

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def is_converted(self) -> bool:
        return self._status is SubmissionStatus.CONVERTED

    @property
    def converted_talent_id(self) -> UUID | None:
        return self._converted_talent_id

    @property
    def converted_account_id(self) -> UUID | None:
        return self._converted_account_id

    @property
    def converted_at(self) -> datetime | None:
        return self._converted_at

    def approve(self) -> None:
        self._review(SubmissionStatus.APPROVED)

    def reject(self) -> None:
        self._review(SubmissionStatus.REJECTED)

    def _review(self, decision: SubmissionStatus) -> None:
        if self.is_converted:
            raise AlreadyConvertedError(
                f"Lead submission {self.id} is converted and can no longer be reviewed"
            )
        self._status = decision

    def convert(self, *, talent_id: UUID, account_id: UUID, at: datetime | None = None) -> None:
        if self.is_converted:
            raise AlreadyConvertedError(f"Lead submission {self.id} is already converted")
        if self._status is SubmissionStatus.REJECTED:
            raise TerminalStateConflictError(
                f"Lead submission {self.id} was rejected and cannot be converted"
            )
        self._status = SubmissionStatus.CONVERTED
        self._converted_talent_id = talent_id
        self._converted_account_id = account_id
        self._converted_at = at or utcnow()
