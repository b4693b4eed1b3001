"""Diagnostics hooks for the reconciliation components.

Components receive an observer at construction instead of reaching for a
module-level logger, so the core stays free of global state. ``NullObserver``
is the default; ``LoggingObserver`` forwards to :mod:`logging`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from activity_sync.domain.model import ActivityEvent, LedgerRecord, RoleAssignment

    from .contracts import UnresolvedEvent


class ReconciliationObserver(Protocol):
    def event_unresolved(self, event: ActivityEvent, outcome: UnresolvedEvent) -> None: ...

    def event_unmergeable(self, event: ActivityEvent) -> None: ...

    def record_created(self, record: LedgerRecord) -> None: ...

    def record_changed(self, record: LedgerRecord) -> None: ...

    def duplicate_assignment(self, assignment: RoleAssignment) -> None: ...


class NullObserver:
    """Observer that ignores every notification."""

    def event_unresolved(self, event: ActivityEvent, outcome: UnresolvedEvent) -> None:
        _ = (event, outcome)

    def event_unmergeable(self, event: ActivityEvent) -> None:
        _ = event

    def record_created(self, record: LedgerRecord) -> None:
        _ = record

    def record_changed(self, record: LedgerRecord) -> None:
        _ = record

    def duplicate_assignment(self, assignment: RoleAssignment) -> None:
        _ = assignment


class LoggingObserver:
    """Observer that reports to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.log = logger or logging.getLogger("activity_sync.reconciliation")

    def event_unresolved(self, event: ActivityEvent, outcome: UnresolvedEvent) -> None:
        self.log.debug(
            "Dropping %s event from %s (person=%s, email=%s): %s",
            event.activity,
            event.occurred_on,
            event.person_id,
            event.email,
            outcome.reason,
        )

    def event_unmergeable(self, event: ActivityEvent) -> None:
        self.log.warning(
            "Resolved person %s has no directory entry; %s event skipped",
            event.person_id,
            event.activity,
        )

    def record_created(self, record: LedgerRecord) -> None:
        self.log.debug(
            "New ledger record person=%s %s-%02d",
            record.key.person_id,
            record.year,
            record.month,
        )

    def record_changed(self, record: LedgerRecord) -> None:
        self.log.debug(
            "Ledger record %s changed: activities=%s paths=%s",
            record.persisted_id,
            sorted(record.activity_types),
            sorted(record.paths),
        )

    def duplicate_assignment(self, assignment: RoleAssignment) -> None:
        self.log.info("Person %s listed more than once in one role list", assignment.person_id)


if TYPE_CHECKING:
    _null_check: ReconciliationObserver = NullObserver()
    _logging_check: ReconciliationObserver = LoggingObserver()
