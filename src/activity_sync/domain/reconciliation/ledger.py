"""In-memory projection of the activity ledger for one run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from activity_sync.domain.model import UNKNOWN_PERSON_ID, LedgerKey, LedgerRecord

from .contracts import IdentityOrder, LedgerKeyPolicy
from .errors import DuplicateLedgerKeyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from activity_sync.domain.model import PersistedActivityRecord


class LedgerStore:
    """Owns exactly one ``LedgerRecord`` per ``LedgerKey``."""

    def __init__(self) -> None:
        self._records: dict[LedgerKey, LedgerRecord] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LedgerRecord]:
        return iter(self._records.values())

    def get(self, key: LedgerKey) -> LedgerRecord | None:
        return self._records.get(key)

    def keys(self) -> tuple[LedgerKey, ...]:
        return tuple(self._records)

    def add(self, record: LedgerRecord) -> None:
        existing = self._records.get(record.key)
        if existing is not None:
            raise DuplicateLedgerKeyError(
                record.key,
                existing_id=existing.persisted_id,
                duplicate_id=record.persisted_id,
            )
        self._records[record.key] = record

    def dirty_records(self) -> Iterator[LedgerRecord]:
        return (record for record in self._records.values() if record.dirty)


def ledger_identity(
    *,
    primary_contact_id: int | None,
    root_contact_id: int | None,
    order: IdentityOrder = IdentityOrder.ROOT_FIRST,
) -> int:
    """Pick the person component of a persisted record's key."""

    if order is IdentityOrder.ROOT_FIRST:
        candidates = (root_contact_id, primary_contact_id)
    else:
        candidates = (primary_contact_id, root_contact_id)
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return UNKNOWN_PERSON_ID


def seed_ledger(
    records: Iterable[PersistedActivityRecord],
    *,
    policy: LedgerKeyPolicy | None = None,
) -> LedgerStore:
    """Load persisted records as clean ledger records.

    Raises ``DuplicateLedgerKeyError`` when two records share a key.
    """

    order = (policy or LedgerKeyPolicy()).seed_order
    store = LedgerStore()
    for persisted in records:
        person_id = ledger_identity(
            primary_contact_id=persisted.primary_contact_id,
            root_contact_id=persisted.root_contact_id,
            order=order,
        )
        store.add(
            LedgerRecord(
                key=LedgerKey(person_id=person_id, year=persisted.year, month=persisted.month),
                persisted_id=persisted.persisted_id,
                primary_contact_id=persisted.primary_contact_id,
                root_contact_id=persisted.root_contact_id,
                activity_types=set(persisted.activity_types),
                paths=set(persisted.paths),
            )
        )
    return store
