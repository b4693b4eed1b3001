"""Extract the records a run has to persist."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .contracts import ChangeSet

if TYPE_CHECKING:
    from .ledger import LedgerStore


def emit_change_set(store: LedgerStore) -> ChangeSet:
    """Split dirty records into inserts (never persisted) and updates."""

    change_set = ChangeSet()
    for record in store.dirty_records():
        if record.is_new:
            change_set.to_insert.append(record)
        else:
            change_set.to_update.append(record)
    return change_set
