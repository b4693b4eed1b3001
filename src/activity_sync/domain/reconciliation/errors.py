"""Failures that abort a reconciliation run."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from activity_sync.domain.model import LedgerKey


class ReconciliationError(RuntimeError):
    """Base class for fatal reconciliation errors."""


class PreconditionError(ReconciliationError):
    """Raised when a required input of the run is unavailable."""


class DirectoryUnavailableError(PreconditionError):
    """Raised when a contact role list cannot be retrieved."""


class LedgerIntegrityError(ReconciliationError):
    """Raised when persisted ledger records violate the ledger invariants."""


class DuplicateLedgerKeyError(LedgerIntegrityError):
    """Raised when two persisted records map onto the same ledger key."""

    def __init__(self, key: LedgerKey, *, existing_id: int | None, duplicate_id: int | None) -> None:
        super().__init__(
            f"Duplicate ledger key person={key.person_id} {key.year}-{key.month:02d} "
            f"(records {existing_id} and {duplicate_id})"
        )
        self.key = key
        self.existing_id = existing_id
        self.duplicate_id = duplicate_id
