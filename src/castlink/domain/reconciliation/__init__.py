"""Reconciliation engine: matching, conversion triggers and membership replay."""

from __future__ import annotations

from .contracts import (
    ConversionOutcome,
    ConversionResult,
    EntryConversion,
    IssueKind,
    ReconciliationIssue,
    ScanResult,
    UnitOfWorkFactory,
)
from .direct import convert_from_submission
from .engine import ReconciliationEngine
from .matching import MatchCriteria, find_candidates
from .replay import (
    DEFAULT_MEMBER_ROLE,
    MembershipTarget,
    ReplayOutcome,
    ReplayReport,
    ensure_membership,
    replay_memberships,
)
from .scan import scan_and_convert

__all__ = [
    "DEFAULT_MEMBER_ROLE",
    "ConversionOutcome",
    "ConversionResult",
    "EntryConversion",
    "IssueKind",
    "MatchCriteria",
    "MembershipTarget",
    "ReconciliationEngine",
    "ReconciliationIssue",
    "ReplayOutcome",
    "ReplayReport",
    "ScanResult",
    "UnitOfWorkFactory",
    "convert_from_submission",
    "ensure_membership",
    "find_candidates",
    "replay_memberships",
    "scan_and_convert",
]
