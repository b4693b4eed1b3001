"""Fold resolved activity events into the ledger store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from activity_sync.domain.model import LedgerKey, LedgerRecord

from .contracts import UnresolvedEvent
from .observer import NullObserver, ReconciliationObserver
from .resolve import EventResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from activity_sync.domain.model import ActivityEvent

    from .directory import PersonDirectory
    from .ledger import LedgerStore


class MergeOutcome(StrEnum):
    CREATED = "created"
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    UNRESOLVED = "unresolved"
    UNMERGEABLE = "unmergeable"


@dataclass(slots=True)
class MergeSummary:
    """Per-outcome event counts of one merge pass."""

    resolved: int = 0
    unresolved: int = 0
    created: int = 0
    changed: int = 0
    unchanged: int = 0
    unmergeable: int = 0

    def count(self, outcome: MergeOutcome) -> None:
        if outcome is MergeOutcome.UNRESOLVED:
            self.unresolved += 1
            return
        self.resolved += 1
        if outcome is MergeOutcome.CREATED:
            self.created += 1
        elif outcome is MergeOutcome.CHANGED:
            self.changed += 1
        elif outcome is MergeOutcome.UNCHANGED:
            self.unchanged += 1
        else:
            self.unmergeable += 1


@dataclass(slots=True)
class MergeEngine:
    """Single serial upsert path into a ``LedgerStore``."""

    store: LedgerStore
    directory: PersonDirectory
    observer: ReconciliationObserver = field(default_factory=NullObserver)
    resolver: EventResolver = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = EventResolver(self.directory, observer=self.observer)

    def merge(self, events: Iterable[ActivityEvent]) -> MergeSummary:
        summary = MergeSummary()
        for event in events:
            summary.count(self.merge_event(event))
        return summary

    def merge_event(self, event: ActivityEvent) -> MergeOutcome:
        resolution = self.resolver(event)
        if isinstance(resolution, UnresolvedEvent) or event.person_id is None:
            return MergeOutcome.UNRESOLVED
        key = LedgerKey.for_date(event.person_id, event.occurred_on)
        return self._upsert(key, event)

    def _upsert(self, key: LedgerKey, event: ActivityEvent) -> MergeOutcome:
        record = self.store.get(key)
        if record is not None:
            added_activity = record.add_activity(event.activity)
            added_paths = record.add_paths(event.paths)
            if added_activity or added_paths:
                self.observer.record_changed(record)
                return MergeOutcome.CHANGED
            return MergeOutcome.UNCHANGED

        person = self.directory.get(key.person_id)
        if person is None:
            self.observer.event_unmergeable(event)
            return MergeOutcome.UNMERGEABLE

        record = LedgerRecord(
            key=key,
            primary_contact_id=person.primary_contact_id,
            root_contact_id=person.root_contact_id,
            activity_types={event.activity},
            paths=set(event.paths),
            dirty=True,
        )
        self.store.add(record)
        self.observer.record_created(record)
        return MergeOutcome.CREATED
