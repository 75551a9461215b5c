"""Entry point bundling both conversion triggers behind one configured object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from castlink.domain.model import utcnow

from .direct import convert_from_submission
from .replay import DEFAULT_MEMBER_ROLE
from .scan import scan_and_convert

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from .contracts import ConversionResult, ScanResult, UnitOfWorkFactory


@dataclass(slots=True)
class ReconciliationEngine:
    unit_of_work_factory: UnitOfWorkFactory
    default_member_role: str = DEFAULT_MEMBER_ROLE
    clock: Callable[[], datetime] = utcnow

    def convert_from_submission(
        self,
        account_id: UUID,
        talent_record_id: UUID,
        submission_id: UUID,
    ) -> ConversionResult:
        return convert_from_submission(
            account_id=account_id,
            talent_record_id=talent_record_id,
            submission_id=submission_id,
            unit_of_work_factory=self.unit_of_work_factory,
            default_role=self.default_member_role,
            clock=self.clock,
        )

    def scan_and_convert(
        self,
        account_id: UUID,
        talent_record_id: UUID,
        email: str,
        phone: str | None = None,
    ) -> ScanResult:
        return scan_and_convert(
            account_id=account_id,
            talent_record_id=talent_record_id,
            email=email,
            phone=phone,
            unit_of_work_factory=self.unit_of_work_factory,
            default_role=self.default_member_role,
            clock=self.clock,
        )
