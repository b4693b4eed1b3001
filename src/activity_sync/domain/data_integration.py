"""Application service reconciling activity events into the stored ledger."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from activity_sync.domain.model import ContactRole
from activity_sync.domain.reconciliation import (
    PreconditionError,
    ReconciliationEngine,
    load_person_directory,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from activity_sync.domain.model import ActivityEvent, PersistedActivityRecord
    from activity_sync.domain.ports import ActivityRecordRepository, ActivityUnitOfWork
    from activity_sync.domain.reconciliation import ChangeSet, MergeSummary

log = getLogger(__name__)


@dataclass(slots=True)
class SyncLedgerResult:
    """Outcome of a ledger sync run."""

    received: int
    inserted: int
    updated: int
    summary: MergeSummary


def sync_activity_ledger(
    events: Iterable[ActivityEvent],
    *,
    unit_of_work_factory: Callable[[], ActivityUnitOfWork],
    engine: ReconciliationEngine | None = None,
) -> SyncLedgerResult:
    """Merge ``events`` into the ledger and persist the records that changed.

    Loading the existing ledger or either contact list is a precondition: any
    failure aborts the run before anything is written.
    """

    effective_engine = engine or ReconciliationEngine()
    incoming = list(events)

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        persisted = _load_persisted_records(repositories.activity_records)
        directory = load_person_directory(
            lambda: repositories.contacts.list_assignments(ContactRole.PRIMARY),
            lambda: repositories.contacts.list_assignments(ContactRole.ROOT),
            observer=effective_engine.observer,
        )
        result = effective_engine.reconcile_with_directory(
            persisted=persisted,
            directory=directory,
            events=incoming,
        )
        _persist_change_set(repositories.activity_records, result.change_set)
        uow.commit()

    summary = result.summary
    log.info(
        "Ledger sync finished: received=%s resolved=%s unresolved=%s inserted=%s updated=%s",
        len(incoming),
        summary.resolved,
        summary.unresolved,
        len(result.change_set.to_insert),
        len(result.change_set.to_update),
    )
    return SyncLedgerResult(
        received=len(incoming),
        inserted=len(result.change_set.to_insert),
        updated=len(result.change_set.to_update),
        summary=summary,
    )


def _load_persisted_records(
    repository: ActivityRecordRepository,
) -> list[PersistedActivityRecord]:
    try:
        return list(repository.list_records())
    except Exception as exc:
        raise PreconditionError(f"Getting existing activity records failed: {exc}") from exc


def _persist_change_set(repository: ActivityRecordRepository, change_set: ChangeSet) -> None:
    for record in change_set.to_insert:
        record.persisted_id = repository.add(record)
    for record in change_set.to_update:
        repository.update(record)
