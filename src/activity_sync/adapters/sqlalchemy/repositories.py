"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from activity_sync.adapters.sqlalchemy.mappings import (
    activity_record_table,
    contact_assignment_table,
    mentoring_calendar_entry_table,
)
from activity_sync.domain.model import CalendarEntry, PersistedActivityRecord, RoleAssignment

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from activity_sync.domain.model import ContactRole, LedgerRecord


class SqlAlchemyActivityRecordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_records(self) -> list[PersistedActivityRecord]:
        table = activity_record_table
        stmt = select(
            table.c.id,
            table.c.year,
            table.c.month,
            table.c.primary_contact_id,
            table.c.root_contact_id,
            table.c.activity_types,
            table.c.paths,
        ).order_by(table.c.id)
        return [
            PersistedActivityRecord(
                persisted_id=row.id,
                year=row.year,
                month=row.month,
                primary_contact_id=row.primary_contact_id,
                root_contact_id=row.root_contact_id,
                activity_types=row.activity_types,
                paths=row.paths,
            )
            for row in self.session.execute(stmt)
        ]

    def add(self, record: LedgerRecord) -> int:
        stmt = activity_record_table.insert().values(
            year=record.year,
            month=record.month,
            primary_contact_id=record.primary_contact_id,
            root_contact_id=record.root_contact_id,
            activity_types=frozenset(record.activity_types),
            paths=frozenset(record.paths),
            updated_at=datetime.now(UTC),
        )
        result = self.session.execute(stmt)
        primary_key = result.inserted_primary_key
        if primary_key is None:
            raise RuntimeError("Insert into activity_record returned no primary key")
        return cast(int, primary_key[0])

    def update(self, record: LedgerRecord) -> None:
        if record.persisted_id is None:
            raise ValueError("Cannot update a ledger record that was never persisted")
        stmt = (
            activity_record_table.update()
            .where(activity_record_table.c.id == record.persisted_id)
            .values(
                activity_types=frozenset(record.activity_types),
                paths=frozenset(record.paths),
                updated_at=datetime.now(UTC),
            )
        )
        self.session.execute(stmt)


class SqlAlchemyContactRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_assignments(self, role: ContactRole) -> list[RoleAssignment]:
        table = contact_assignment_table
        stmt = (
            select(table.c.person_id, table.c.email, table.c.paths)
            .where(table.c.role == role)
            .order_by(table.c.id)
        )
        return [
            RoleAssignment(person_id=row.person_id, email=row.email, paths=row.paths)
            for row in self.session.execute(stmt)
        ]

    def add(self, role: ContactRole, assignment: RoleAssignment) -> None:
        self.session.execute(
            contact_assignment_table.insert().values(
                person_id=assignment.person_id,
                role=role,
                email=assignment.email,
                paths=assignment.paths,
            )
        )


class SqlAlchemyMentoringCalendarRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def entries_between(self, start: datetime, end: datetime) -> list[CalendarEntry]:
        table = mentoring_calendar_entry_table
        stmt = (
            select(table.c.employee_email, table.c.start_time, table.c.end_time)
            .where(table.c.start_time < end)
            .where(table.c.end_time >= start)
            .order_by(table.c.start_time, table.c.id)
        )
        return [
            CalendarEntry(
                employee_email=row.employee_email,
                start_time=row.start_time,
                end_time=row.end_time,
            )
            for row in self.session.execute(stmt)
        ]

    def add(self, entry: CalendarEntry) -> None:
        self.session.execute(
            mentoring_calendar_entry_table.insert().values(
                employee_email=entry.employee_email,
                start_time=entry.start_time,
                end_time=entry.end_time,
            )
        )


if TYPE_CHECKING:
    from activity_sync.domain.ports import (
        ActivityRecordRepository,
        ContactRepository,
        MentoringCalendarRepository,
    )

    _session_stub = cast("Session", object())
    _record_repo: ActivityRecordRepository = SqlAlchemyActivityRecordRepository(_session_stub)
    _contact_repo: ContactRepository = SqlAlchemyContactRepository(_session_stub)
    _calendar_repo: MentoringCalendarRepository = SqlAlchemyMentoringCalendarRepository(
        _session_stub
    )
