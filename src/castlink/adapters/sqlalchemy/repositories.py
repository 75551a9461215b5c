"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import exists, func, or_, select

from castlink.adapters.sqlalchemy.mappings import (
    account_table,
    lead_submission_table,
    membership_table,
    roster_entry_table,
    shareable_code_table,
    talent_record_table,
)
from castlink.domain.model import (
    Account,
    LeadSubmission,
    Membership,
    Production,
    RosterEntry,
    RosterStatus,
    ShareableCode,
    Studio,
    SubmissionStatus,
    TalentRecord,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session
    from sqlalchemy.sql import Select


class SqlAlchemyRepository[TEntity]:
    """Shared add/get behaviour for repositories keyed by entity id."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def get(self, entity_id: uuid.UUID) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)


class SqlAlchemyStudioRepository(SqlAlchemyRepository[Studio]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Studio)


class SqlAlchemyProductionRepository(SqlAlchemyRepository[Production]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Production)


class SqlAlchemyShareableCodeRepository(SqlAlchemyRepository[ShareableCode]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, ShareableCode)

    def get_by_code(self, code: str) -> ShareableCode | None:
        stmt = select(ShareableCode).where(shareable_code_table.c.code == code)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyAccountRepository(SqlAlchemyRepository[Account]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Account)

    def get_by_email(self, email: str) -> Account | None:
        stmt = select(Account).where(func.lower(account_table.c.email) == email.strip().lower())
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyTalentRecordRepository(SqlAlchemyRepository[TalentRecord]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, TalentRecord)

    def get_by_account(self, account_id: uuid.UUID) -> TalentRecord | None:
        stmt = select(TalentRecord).where(talent_record_table.c.account_id == account_id)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyRosterEntryRepository(SqlAlchemyRepository[RosterEntry]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, RosterEntry)

    def get(self, entity_id: uuid.UUID, *, for_update: bool = False) -> RosterEntry | None:
        if not for_update:
            return super().get(entity_id)
        stmt = (
            select(RosterEntry)
            .where(roster_entry_table.c.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def find_active_by_contact(self, *, email: str, phone: str | None) -> list[RosterEntry]:
        columns = roster_entry_table.c
        clauses = [func.lower(columns.email) == email]
        if phone is not None:
            clauses.append(columns.phone == phone)
        stmt = select(RosterEntry).where(
            columns._status == RosterStatus.ACTIVE,  # noqa: SLF001
            or_(*clauses),
        )
        return list(self.session.execute(stmt).scalars().unique())

    def list_converted_to(self, talent_id: uuid.UUID) -> list[RosterEntry]:
        stmt = (
            select(RosterEntry)
            .where(roster_entry_table.c._converted_talent_id == talent_id)  # noqa: SLF001
            .order_by(roster_entry_table.c.created_at, roster_entry_table.c.id)
        )
        return list(self.session.execute(stmt).scalars())

    def find_in_studio_by_email(self, studio_id: uuid.UUID, email: str) -> RosterEntry | None:
        stmt = self._in_studio(studio_id).where(
            func.lower(roster_entry_table.c.email) == email.strip().lower()
        )
        return self.session.execute(stmt).scalars().first()

    def find_in_studio_by_name(
        self,
        studio_id: uuid.UUID,
        *,
        first_name: str,
        last_name: str,
        phone: str | None = None,
    ) -> RosterEntry | None:
        columns = roster_entry_table.c
        stmt = self._in_studio(studio_id).where(
            columns.first_name == first_name,
            columns.last_name == last_name,
        )
        if phone is not None:
            stmt = stmt.where(columns.phone == phone)
        return self.session.execute(stmt).scalars().first()

    @staticmethod
    def _in_studio(studio_id: uuid.UUID) -> Select[tuple[RosterEntry]]:
        return (
            select(RosterEntry)
            .where(roster_entry_table.c.studio_id == studio_id)
            .order_by(roster_entry_table.c.created_at, roster_entry_table.c.id)
            .limit(1)
        )


class SqlAlchemyLeadSubmissionRepository(SqlAlchemyRepository[LeadSubmission]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, LeadSubmission)

    def get(self, entity_id: uuid.UUID, *, for_update: bool = False) -> LeadSubmission | None:
        if not for_update:
            return super().get(entity_id)
        stmt = (
            select(LeadSubmission)
            .where(lead_submission_table.c.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_converted_to(self, talent_id: uuid.UUID) -> list[LeadSubmission]:
        columns = lead_submission_table.c
        stmt = (
            select(LeadSubmission)
            .where(
                columns._status == SubmissionStatus.CONVERTED,  # noqa: SLF001
                columns._converted_talent_id == talent_id,  # noqa: SLF001
            )
            .order_by(columns.created_at, columns.id)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyMembershipRepository(SqlAlchemyRepository[Membership]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Membership)

    def exists(self, *, production_id: uuid.UUID, talent_id: uuid.UUID) -> bool:
        stmt = select(
            exists().where(
                membership_table.c.production_id == production_id,
                membership_table.c.talent_id == talent_id,
            )
        )
        return bool(self.session.execute(stmt).scalar())

    def list_for_talent(self, talent_id: uuid.UUID) -> list[Membership]:
        stmt = (
            select(Membership)
            .where(membership_table.c.talent_id == talent_id)
            .order_by(membership_table.c.created_at, membership_table.c.id)
        )
        return list(self.session.execute(stmt).scalars())
