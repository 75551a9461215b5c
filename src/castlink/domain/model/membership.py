"""Association of a talent record to a production."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .entity import Entity
from .enums import EntityType
from .primitives import utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Membership(Entity):
    """At most one row exists per (production_id, talent_id)."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.MEMBERSHIP

    production_id: UUID
    talent_id: UUID
    role: str
    notes: str | None = None
    created_at: datetime = field(default_factory=utcnow)
