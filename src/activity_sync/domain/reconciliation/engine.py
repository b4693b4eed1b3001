"""Orchestrator for one reconciliation run.

The engine builds every per-run structure from scratch: the person directory,
the seeded ledger store and the merge engine. It either returns a complete
change set or lets the failure propagate before any output exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .changeset import emit_change_set
from .contracts import LedgerKeyPolicy
from .directory import build_person_directory
from .ledger import seed_ledger
from .merge import MergeEngine
from .observer import NullObserver, ReconciliationObserver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from activity_sync.domain.model import ActivityEvent, PersistedActivityRecord, RoleAssignment

    from .contracts import ChangeSet
    from .directory import PersonDirectory
    from .merge import MergeSummary


@dataclass(slots=True)
class ReconciliationResult:
    change_set: ChangeSet
    summary: MergeSummary


@dataclass(slots=True)
class ReconciliationEngine:
    """Run directory build, seeding, merge and change-set emission."""

    policy: LedgerKeyPolicy = field(default_factory=LedgerKeyPolicy)
    observer: ReconciliationObserver = field(default_factory=NullObserver)

    def reconcile(
        self,
        *,
        persisted: Iterable[PersistedActivityRecord],
        primary_contacts: Iterable[RoleAssignment],
        root_contacts: Iterable[RoleAssignment],
        events: Iterable[ActivityEvent],
    ) -> ReconciliationResult:
        directory = build_person_directory(
            primary_contacts,
            root_contacts,
            observer=self.observer,
        )
        return self.reconcile_with_directory(
            persisted=persisted,
            directory=directory,
            events=events,
        )

    def reconcile_with_directory(
        self,
        *,
        persisted: Iterable[PersistedActivityRecord],
        directory: PersonDirectory,
        events: Iterable[ActivityEvent],
    ) -> ReconciliationResult:
        store = seed_ledger(persisted, policy=self.policy)
        merger = MergeEngine(store=store, directory=directory, observer=self.observer)
        summary = merger.merge(events)
        return ReconciliationResult(change_set=emit_change_set(store), summary=summary)
