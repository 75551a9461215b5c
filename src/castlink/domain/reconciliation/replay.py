"""Replay production associations of shadow records onto memberships."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from castlink.domain.model import ConstraintViolationError, Membership, PersistenceError

from .contracts import IssueKind, ReconciliationIssue

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from castlink.domain.model import EntityType

    from .contracts import UnitOfWorkFactory

DEFAULT_MEMBER_ROLE = "Talent"

log = logging.getLogger(__name__)


class ReplayOutcome(StrEnum):
    CREATED = "created"
    EXISTING = "existing"


@dataclass(frozen=True, slots=True)
class MembershipTarget:
    """A production a talent record should be a member of, and how to label it."""

    production_id: UUID
    role: str
    notes: str | None = None


@dataclass(slots=True)
class ReplayReport:
    created: list[UUID] = field(default_factory=list["UUID"])
    existing: list[UUID] = field(default_factory=list["UUID"])
    issues: list[ReconciliationIssue] = field(default_factory=list["ReconciliationIssue"])


def ensure_membership(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    talent_id: UUID,
    target: MembershipTarget,
) -> ReplayOutcome:
    """Create the membership unless it exists, in a transaction of its own.

    The existence check is only an optimisation: two triggers can both pass it,
    and the unique (production, talent) constraint then rejects the second
    insert, which is reported as ``EXISTING``.
    """

    with unit_of_work_factory() as uow:
        memberships = uow.repositories.memberships
        if memberships.exists(production_id=target.production_id, talent_id=talent_id):
            return ReplayOutcome.EXISTING
        memberships.add(
            Membership(
                production_id=target.production_id,
                talent_id=talent_id,
                role=target.role,
                notes=target.notes,
            )
        )
        try:
            uow.commit()
        except ConstraintViolationError:
            log.debug(
                "Membership for talent %s on production %s was created concurrently",
                talent_id,
                target.production_id,
            )
            return ReplayOutcome.EXISTING
    return ReplayOutcome.CREATED


def replay_memberships(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    talent_id: UUID,
    targets: Iterable[MembershipTarget],
    source_type: EntityType,
    source_id: UUID,
) -> ReplayReport:
    """Ensure every target membership exists; failures are collected, never raised."""

    report = ReplayReport()
    seen: set[UUID] = set()
    for target in targets:
        if target.production_id in seen:
            continue
        seen.add(target.production_id)
        try:
            outcome = ensure_membership(unit_of_work_factory, talent_id=talent_id, target=target)
        except PersistenceError as exc:
            log.exception(
                "Membership replay failed: talent=%s production=%s source=%s:%s",
                talent_id,
                target.production_id,
                source_type,
                source_id,
            )
            report.issues.append(
                ReconciliationIssue(
                    kind=IssueKind.PARTIAL_REPLAY_FAILURE,
                    entity_type=source_type,
                    entity_id=source_id,
                    detail=f"membership on production {target.production_id} not created: {exc}",
                )
            )
            continue
        if outcome is ReplayOutcome.CREATED:
            report.created.append(target.production_id)
        else:
            report.existing.append(target.production_id)
    return report
