"""SQLAlchemy adapter package for activity-sync."""

from __future__ import annotations

from .mappings import (
    activity_record_table,
    contact_assignment_table,
    create_all_tables,
    mentoring_calendar_entry_table,
    metadata,
)
from .repositories import (
    SqlAlchemyActivityRecordRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyMentoringCalendarRepository,
)
from .unit_of_work import (
    SqlAlchemyActivityUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyActivityRecordRepository",
    "SqlAlchemyActivityUnitOfWork",
    "SqlAlchemyContactRepository",
    "SqlAlchemyMentoringCalendarRepository",
    "StartupError",
    "activity_record_table",
    "configured_engine",
    "contact_assignment_table",
    "create_all_tables",
    "is_started",
    "mentoring_calendar_entry_table",
    "metadata",
    "shutdown",
    "startup",
]
