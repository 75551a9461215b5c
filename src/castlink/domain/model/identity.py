"""Canonical identities created by the registration flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .entity import Entity
from .enums import EntityType
from .primitives import normalize_email, normalize_phone, utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Account(Entity):
    """A registered platform user."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ACCOUNT

    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        email = normalize_email(self.email)
        if email is None:
            raise ValueError("Account requires an email address")
        self.email = email
        self.phone = normalize_phone(self.phone)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(eq=False, kw_only=True)
class TalentRecord(Entity):
    """Talent-role profile, one-to-one with an account."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TALENT_RECORD

    account_id: UUID
