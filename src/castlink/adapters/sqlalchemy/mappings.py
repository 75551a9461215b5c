"""SQLAlchemy mapping metadata for the castlink domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from castlink.domain.model import (
    Account,
    LeadSubmission,
    Membership,
    Production,
    RosterEntry,
    RosterProduction,
    RosterStatus,
    ShareableCode,
    Studio,
    SubmissionStatus,
    TalentRecord,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Studio side -----------------------------------------------------------------

studio_table = Table(
    "studio",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

production_table = Table(
    "production",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("studio_id", UUIDColumnType, ForeignKey("studio.id"), nullable=False, index=True),
    Column("title", String, nullable=False),
)

shareable_code_table = Table(
    "shareable_code",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("code", String, nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("studio_id", UUIDColumnType, ForeignKey("studio.id"), nullable=False),
    Column("production_id", UUIDColumnType, ForeignKey("production.id"), nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("expires_at", UTCDateTime(), nullable=True),
)

# Canonical identity ----------------------------------------------------------

account_table = Table(
    "account",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("email", String, nullable=False, unique=True),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("phone", String, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

talent_record_table = Table(
    "talent_record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("account_id", UUIDColumnType, ForeignKey("account.id"), nullable=False, unique=True),
)

# Shadow records --------------------------------------------------------------

roster_entry_table = Table(
    "roster_entry",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("studio_id", UUIDColumnType, ForeignKey("studio.id"), nullable=False),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("notes", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("status", Enum(RosterStatus, native_enum=False), key="_status", nullable=False),
    Column(
        "converted_talent_id",
        UUIDColumnType,
        ForeignKey("talent_record.id"),
        key="_converted_talent_id",
        nullable=True,
    ),
    Column(
        "converted_account_id",
        UUIDColumnType,
        ForeignKey("account.id"),
        key="_converted_account_id",
        nullable=True,
    ),
    Column("converted_at", UTCDateTime(), key="_converted_at", nullable=True),
    Column("version", Integer, key="_version", nullable=False),
    UniqueConstraint("studio_id", "email"),
    CheckConstraint(
        "(status = 'CONVERTED') = (converted_talent_id IS NOT NULL)",
        name="conversion_linkage",
    ),
)

Index(
    "ix_roster_entry_status_email",
    roster_entry_table.c._status,  # noqa: SLF001
    roster_entry_table.c.email,
)
Index(
    "ix_roster_entry_status_phone",
    roster_entry_table.c._status,  # noqa: SLF001
    roster_entry_table.c.phone,
)
Index(
    "ix_roster_entry_converted_talent_id",
    roster_entry_table.c._converted_talent_id,  # noqa: SLF001
)

roster_production_table = Table(
    "roster_production",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "roster_entry_id",
        UUIDColumnType,
        ForeignKey("roster_entry.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("production_id", UUIDColumnType, ForeignKey("production.id"), nullable=False),
    Column("role", String, nullable=True),
    Column("notes", Text, nullable=True),
    UniqueConstraint("roster_entry_id", "production_id"),
)

lead_submission_table = Table(
    "lead_submission",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("code_id", UUIDColumnType, ForeignKey("shareable_code.id"), nullable=False),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("email", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("message", Text, nullable=True),
    Column("roster_entry_id", UUIDColumnType, ForeignKey("roster_entry.id"), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("status", Enum(SubmissionStatus, native_enum=False), key="_status", nullable=False),
    Column(
        "converted_talent_id",
        UUIDColumnType,
        ForeignKey("talent_record.id"),
        key="_converted_talent_id",
        nullable=True,
    ),
    Column(
        "converted_account_id",
        UUIDColumnType,
        ForeignKey("account.id"),
        key="_converted_account_id",
        nullable=True,
    ),
    Column("converted_at", UTCDateTime(), key="_converted_at", nullable=True),
    Column("version", Integer, key="_version", nullable=False),
    CheckConstraint(
        "(status = 'CONVERTED') = (converted_talent_id IS NOT NULL)",
        name="conversion_linkage",
    ),
)
Index(
    "ix_lead_submission_converted_talent_id",
    lead_submission_table.c._converted_talent_id,  # noqa: SLF001
)


# Memberships -----------------------------------------------------------------

membership_table = Table(
    "membership",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("production_id", UUIDColumnType, ForeignKey("production.id"), nullable=False),
    Column("talent_id", UUIDColumnType, ForeignKey("talent_record.id"), nullable=False),
    Column("role", String, nullable=False),
    Column("notes", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("production_id", "talent_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Studio, studio_table)
    mapper_registry.map_imperatively(Production, production_table)
    mapper_registry.map_imperatively(ShareableCode, shareable_code_table)
    mapper_registry.map_imperatively(Account, account_table)
    mapper_registry.map_imperatively(TalentRecord, talent_record_table)

    mapper_registry.map_imperatively(RosterProduction, roster_production_table)
    mapper_registry.map_imperatively(
        RosterEntry,
        roster_entry_table,
        properties={
            "_production_links": relationship(
                RosterProduction,
                cascade="all, delete-orphan",
                lazy="selectin",
                order_by=roster_production_table.c.id,
            ),
        },
        version_id_col=roster_entry_table.c._version,  # noqa: SLF001
    )
    mapper_registry.map_imperatively(
        LeadSubmission,
        lead_submission_table,
        version_id_col=lead_submission_table.c._version,  # noqa: SLF001
    )

    mapper_registry.map_imperatively(Membership, membership_table)

    configure_mappers()
    return mapper_registry
