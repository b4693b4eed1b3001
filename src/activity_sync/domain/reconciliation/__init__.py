"""Reconciliation core: fold observed activities into the monthly ledger.

Flow for one run:
1) unify the primary-contact and root-contact lists into a person directory
2) seed the ledger store from persisted records
3) resolve every incoming event to a directory person
4) upsert resolved events into the store, marking changed records dirty
5) split dirty records into inserts and updates
"""

from __future__ import annotations

from .changeset import emit_change_set
from .contracts import (
    ChangeSet,
    EventResolution,
    IdentityOrder,
    LedgerKeyPolicy,
    ResolutionSource,
    ResolutionStatus,
    ResolvedEvent,
    UnresolvedEvent,
    UnresolvedReason,
)
from .directory import PersonDirectory, build_person_directory, load_person_directory
from .engine import ReconciliationEngine, ReconciliationResult
from .errors import (
    DirectoryUnavailableError,
    DuplicateLedgerKeyError,
    LedgerIntegrityError,
    PreconditionError,
    ReconciliationError,
)
from .ledger import LedgerStore, ledger_identity, seed_ledger
from .merge import MergeEngine, MergeOutcome, MergeSummary
from .observer import LoggingObserver, NullObserver, ReconciliationObserver
from .resolve import EventResolver

__all__ = [
    "ChangeSet",
    "DirectoryUnavailableError",
    "DuplicateLedgerKeyError",
    "EventResolution",
    "EventResolver",
    "IdentityOrder",
    "LedgerIntegrityError",
    "LedgerKeyPolicy",
    "LedgerStore",
    "LoggingObserver",
    "MergeEngine",
    "MergeOutcome",
    "MergeSummary",
    "NullObserver",
    "PersonDirectory",
    "PreconditionError",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationObserver",
    "ReconciliationResult",
    "ResolutionSource",
    "ResolutionStatus",
    "ResolvedEvent",
    "UnresolvedEvent",
    "UnresolvedReason",
    "build_person_directory",
    "emit_change_set",
    "ledger_identity",
    "load_person_directory",
    "seed_ledger",
]
