"""Single matching rule shared by every conversion trigger.

A roster entry is a candidate for an account when it is still ACTIVE and its
stored email equals the account email (case-insensitively) or, only when the
account has a phone on file, its normalized phone equals the account phone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from castlink.domain.model import normalize_email, normalize_phone

if TYPE_CHECKING:
    from uuid import UUID

    from castlink.domain.model import RosterEntry
    from castlink.domain.ports import RosterEntryRepository


@dataclass(frozen=True, slots=True)
class MatchCriteria:
    email: str
    phone: str | None = None

    @classmethod
    def build(cls, email: str | None, phone: str | None = None) -> MatchCriteria:
        normalized_email = normalize_email(email)
        if normalized_email is None:
            raise ValueError("Matching requires an email address")
        return cls(email=normalized_email, phone=normalize_phone(phone))


def find_candidates(
    repository: RosterEntryRepository,
    criteria: MatchCriteria,
) -> list[RosterEntry]:
    """Return unconverted roster entries across all studios matching ``criteria``."""

    unique: dict[UUID, RosterEntry] = {}
    for entry in repository.find_active_by_contact(email=criteria.email, phone=criteria.phone):
        if entry.is_converted:
            continue
        unique.setdefault(entry.id, entry)
    return sorted(
        unique.values(),
        key=lambda entry: (str(entry.studio_id), entry.last_name, entry.first_name, str(entry.id)),
    )
