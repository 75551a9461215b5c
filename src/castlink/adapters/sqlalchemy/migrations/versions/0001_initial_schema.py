"""initial schema: studios, identities, shadow records, memberships

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_LINKAGE = "(status = 'CONVERTED') = (converted_talent_id IS NOT NULL)"


def _conversion_columns(table: str) -> list[sa.Column[Any]]:
    return [
        sa.Column(
            "converted_talent_id",
            sa.Uuid(),
            sa.ForeignKey(
                "talent_record.id",
                name=op.f(f"fk_{table}_{table}_converted_talent_id_talent_record"),
            ),
            nullable=True,
        ),
        sa.Column(
            "converted_account_id",
            sa.Uuid(),
            sa.ForeignKey(
                "account.id",
                name=op.f(f"fk_{table}_{table}_converted_account_id_account"),
            ),
            nullable=True,
        ),
        sa.Column("converted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "studio",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_studio")),
    )

    op.create_table(
        "production",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("studio_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["studio_id"], ["studio.id"], name=op.f("fk_production_production_studio_id_studio")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_production")),
    )
    op.create_index(op.f("ix_production_studio_id"), "production", ["studio_id"], unique=False)

    op.create_table(
        "shareable_code",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("studio_id", sa.Uuid(), nullable=False),
        sa.Column("production_id", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["studio_id"],
            ["studio.id"],
            name=op.f("fk_shareable_code_shareable_code_studio_id_studio"),
        ),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["production.id"],
            name=op.f("fk_shareable_code_shareable_code_production_id_production"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_shareable_code")),
        sa.UniqueConstraint("code", name=op.f("uq_shareable_code_shareable_code_code")),
    )

    op.create_table(
        "account",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_account")),
        sa.UniqueConstraint("email", name=op.f("uq_account_account_email")),
    )

    op.create_table(
        "talent_record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["account_id"],
            ["account.id"],
            name=op.f("fk_talent_record_talent_record_account_id_account"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_talent_record")),
        sa.UniqueConstraint("account_id", name=op.f("uq_talent_record_talent_record_account_id")),
    )

    op.create_table(
        "roster_entry",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("studio_id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "CONVERTED", name="rosterstatus", native_enum=False),
            nullable=False,
        ),
        *_conversion_columns("roster_entry"),
        sa.ForeignKeyConstraint(
            ["studio_id"], ["studio.id"], name=op.f("fk_roster_entry_roster_entry_studio_id_studio")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_roster_entry")),
        sa.UniqueConstraint(
            "studio_id", "email", name=op.f("uq_roster_entry_roster_entry_studio_id")
        ),
        sa.CheckConstraint(_LINKAGE, name=op.f("ck_roster_entry_conversion_linkage")),
    )
    op.create_index("ix_roster_entry_status_email", "roster_entry", ["status", "email"])
    op.create_index("ix_roster_entry_status_phone", "roster_entry", ["status", "phone"])
    op.create_index(
        "ix_roster_entry_converted_talent_id", "roster_entry", ["converted_talent_id"]
    )

    op.create_table(
        "roster_production",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("roster_entry_id", sa.Uuid(), nullable=False),
        sa.Column("production_id", sa.Uuid(), nullable=False),
        sa.Column("role", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["roster_entry_id"],
            ["roster_entry.id"],
            name=op.f("fk_roster_production_roster_production_roster_entry_id_roster_entry"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["production.id"],
            name=op.f("fk_roster_production_roster_production_production_id_production"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_roster_production")),
        sa.UniqueConstraint(
            "roster_entry_id",
            "production_id",
            name=op.f("uq_roster_production_roster_production_roster_entry_id"),
        ),
    )

    op.create_table(
        "lead_submission",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("code_id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("roster_entry_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING",
                "APPROVED",
                "REJECTED",
                "CONVERTED",
                name="submissionstatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        *_conversion_columns("lead_submission"),
        sa.ForeignKeyConstraint(
            ["code_id"],
            ["shareable_code.id"],
            name=op.f("fk_lead_submission_lead_submission_code_id_shareable_code"),
        ),
        sa.ForeignKeyConstraint(
            ["roster_entry_id"],
            ["roster_entry.id"],
            name=op.f("fk_lead_submission_lead_submission_roster_entry_id_roster_entry"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_lead_submission")),
        sa.CheckConstraint(_LINKAGE, name=op.f("ck_lead_submission_conversion_linkage")),
    )
    op.create_index(
        "ix_lead_submission_converted_talent_id", "lead_submission", ["converted_talent_id"]
    )

    op.create_table(
        "membership",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("production_id", sa.Uuid(), nullable=False),
        sa.Column("talent_id", sa.Uuid(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["production_id"],
            ["production.id"],
            name=op.f("fk_membership_membership_production_id_production"),
        ),
        sa.ForeignKeyConstraint(
            ["talent_id"],
            ["talent_record.id"],
            name=op.f("fk_membership_membership_talent_id_talent_record"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_membership")),
        sa.UniqueConstraint(
            "production_id", "talent_id", name=op.f("uq_membership_membership_production_id")
        ),
    )


def downgrade() -> None:
    op.drop_table("membership")
    op.drop_index("ix_lead_submission_converted_talent_id", table_name="lead_submission")
    op.drop_table("lead_submission")
    op.drop_table("roster_production")
    op.drop_index("ix_roster_entry_converted_talent_id", table_name="roster_entry")
    op.drop_index("ix_roster_entry_status_phone", table_name="roster_entry")
    op.drop_index("ix_roster_entry_status_email", table_name="roster_entry")
    op.drop_table("roster_entry")
    op.drop_table("talent_record")
    op.drop_table("account")
    op.drop_table("shareable_code")
    op.drop_index(op.f("ix_production_studio_id"), table_name="production")
    op.drop_table("production")
    op.drop_table("studio")
