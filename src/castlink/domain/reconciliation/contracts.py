"""Result contracts returned by the reconciliation engine.

This module intentionally holds only:
- outcome / issue enums
- result dataclasses handed back to the registration and sign-in callers
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from castlink.domain.model import EntityType
    from castlink.domain.ports import ReconciliationUnitOfWork

type UnitOfWorkFactory = Callable[[], ReconciliationUnitOfWork]


class ConversionOutcome(StrEnum):
    """What a conversion attempt did to one shadow record."""

    CONVERTED = "converted"
    ALREADY_CONVERTED = "already_converted"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    FAILED = "failed"


class IssueKind(StrEnum):
    NOT_FOUND = "not_found"
    TERMINAL_STATE_CONFLICT = "terminal_state_conflict"
    PARTIAL_REPLAY_FAILURE = "partial_replay_failure"
    PERSISTENCE_FAILURE = "persistence_failure"


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationIssue:
    """A non-fatal problem, with enough context to retry through a scan."""

    kind: IssueKind
    entity_type: EntityType
    entity_id: UUID
    detail: str


@dataclass(slots=True, kw_only=True)
class ConversionResult:
    """Outcome of converting one lead submission at registration time."""

    submission_id: UUID
    outcome: ConversionOutcome
    roster_entry_id: UUID | None = None
    roster_entry_outcome: ConversionOutcome | None = None
    memberships_created: list[UUID] = field(default_factory=list["UUID"])
    issues: list[ReconciliationIssue] = field(default_factory=list["ReconciliationIssue"])

    @property
    def converted(self) -> bool:
        return self.outcome is ConversionOutcome.CONVERTED

    @property
    def is_noop(self) -> bool:
        return self.outcome in {
            ConversionOutcome.ALREADY_CONVERTED,
            ConversionOutcome.NOT_FOUND,
            ConversionOutcome.REJECTED,
        }

    @property
    def message(self) -> str:
        match self.outcome:
            case ConversionOutcome.CONVERTED:
                return f"Linked submission and created {len(self.memberships_created)} memberships"
            case ConversionOutcome.ALREADY_CONVERTED:
                return "Submission was already linked to an account"
            case ConversionOutcome.NOT_FOUND:
                return "Submission not found"
            case ConversionOutcome.REJECTED:
                return "Submission was rejected by the studio and cannot be linked"
            case ConversionOutcome.FAILED:
                return "Submission could not be linked yet; retry linking it to the account"


@dataclass(frozen=True, slots=True, kw_only=True)
class EntryConversion:
    """Per-entry detail of a scan: where the record came from and what was replayed."""

    roster_entry_id: UUID
    studio_id: UUID
    studio_name: str
    productions: int
    memberships_created: int


@dataclass(slots=True, kw_only=True)
class ScanResult:
    """Summary of an identity-triggered scan across every studio's roster."""

    matched: int
    phone_checked: bool
    conversions: list[EntryConversion] = field(default_factory=list["EntryConversion"])
    skipped: list[UUID] = field(default_factory=list["UUID"])
    memberships_restored: int = 0
    issues: list[ReconciliationIssue] = field(default_factory=list["ReconciliationIssue"])

    @property
    def converted(self) -> int:
        return len(self.conversions)

    @property
    def nothing_to_convert(self) -> bool:
        return not self.conversions

    @property
    def partial(self) -> bool:
        return bool(self.issues)

    @property
    def message(self) -> str:
        if self.matched == 0:
            if self.memberships_restored:
                restored = self.memberships_restored
                return f"Restored {restored} memberships from previously linked records"
            if self.phone_checked:
                return "No roster records found matching your email or phone number"
            return "No roster records found matching your email"
        if self.nothing_to_convert:
            return "Matching roster records were already linked to an account"
        message = f"Found {self.converted} prior records and linked them"
        if self.partial:
            message += f" ({len(self.issues)} could not be fully linked yet)"
        return message
