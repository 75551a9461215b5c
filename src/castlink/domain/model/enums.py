"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator used when reporting on heterogeneous records."""

    STUDIO = "studio"
    PRODUCTION = "production"
    SHAREABLE_CODE = "shareable_code"

    ACCOUNT = "account"
    TALENT_RECORD = "talent_record"

    # Pre-registration shadow records:
    ROSTER_ENTRY = "roster_entry"
    ROSTER_PRODUCTION = "roster_production"
    LEAD_SUBMISSION = "lead_submission"

    MEMBERSHIP = "membership"


class RosterStatus(StrEnum):
    ACTIVE = "active"
    CONVERTED = "converted"


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CONVERTED = "converted"
