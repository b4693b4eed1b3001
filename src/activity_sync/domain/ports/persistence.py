"""Ports for the stored ledger, contact lists and mentoring calendar."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from activity_sync.domain.model import (
        CalendarEntry,
        ContactRole,
        LedgerRecord,
        PersistedActivityRecord,
        RoleAssignment,
    )


@runtime_checkable
class ActivityRecordRepository(Protocol):
    """Persistence contract for monthly activity ledger rows."""

    def list_records(self) -> Sequence[PersistedActivityRecord]: ...

    def add(self, record: LedgerRecord) -> int:
        """Insert a new ledger row and return its persisted id."""
        ...

    def update(self, record: LedgerRecord) -> None:
        """Overwrite the activity types and paths of an existing row."""
        ...


@runtime_checkable
class ContactRepository(Protocol):
    """Read access to the primary-contact and root-contact role lists."""

    def list_assignments(self, role: ContactRole) -> Sequence[RoleAssignment]: ...


@runtime_checkable
class MentoringCalendarRepository(Protocol):
    def entries_between(self, start: datetime, end: datetime) -> Sequence[CalendarEntry]:
        """Return entries overlapping ``[start, end)``."""
        ...
