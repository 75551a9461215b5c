"""Studio-side records the reconciliation engine reads but never writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from .entity import Entity
from .enums import EntityType
from .errors import CodeUnavailableError

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Studio(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.STUDIO

    name: str


@dataclass(eq=False, kw_only=True)
class Production(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PRODUCTION

    studio_id: UUID
    title: str


@dataclass(eq=False, kw_only=True)
class ShareableCode(Entity):
    """Studio-issued code that routes anonymous submissions.

    ``production_id`` is the optional production a submission through this
    code implies.
    """

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.SHAREABLE_CODE

    code: str
    name: str
    studio_id: UUID
    production_id: UUID | None = None
    is_active: bool = True
    expires_at: datetime | None = None

    def ensure_accepting(self, at: datetime) -> None:
        if not self.is_active:
            raise CodeUnavailableError(f"Shareable code {self.code} is no longer active")
        if self.expires_at is not None and self.expires_at < at:
            raise CodeUnavailableError(f"Shareable code {self.code} has expired")
