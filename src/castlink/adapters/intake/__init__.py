"""Inbound lead and roster payload adapter."""

from __future__ import annotations

from .schema import LeadSubmissionPayload, RosterRowPayload
from .translator import ParsedRoster, parse_lead, parse_roster_csv, translate_lead

__all__ = [
    "LeadSubmissionPayload",
    "ParsedRoster",
    "RosterRowPayload",
    "parse_lead",
    "parse_roster_csv",
    "translate_lead",
]
