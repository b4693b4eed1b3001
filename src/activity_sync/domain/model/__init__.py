"""Public domain model surface."""

from __future__ import annotations

from activity_sync.domain.model.enums import ContactRole
from activity_sync.domain.model.ledger import (
    MENTORING_ACTIVITY,
    UNKNOWN_PERSON_ID,
    ActivityEvent,
    LedgerKey,
    LedgerRecord,
    PersistedActivityRecord,
)
from activity_sync.domain.model.people import Person, RoleAssignment
from activity_sync.domain.model.sources import (
    Branch,
    CalendarEntry,
    Commit,
    RepositoryActivity,
    SourceRepository,
)

__all__ = [
    "MENTORING_ACTIVITY",
    "UNKNOWN_PERSON_ID",
    "ActivityEvent",
    "Branch",
    "CalendarEntry",
    "Commit",
    "ContactRole",
    "LedgerKey",
    "LedgerRecord",
    "PersistedActivityRecord",
    "Person",
    "RepositoryActivity",
    "RoleAssignment",
    "SourceRepository",
]
