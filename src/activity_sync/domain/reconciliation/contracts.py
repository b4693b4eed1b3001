"""Shared reconciliation contract components.

This module intentionally holds only:
- event resolution outcomes
- the ledger key policy
- the change set handed to persistence
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from activity_sync.domain.model import LedgerRecord, Person


class ResolutionStatus(StrEnum):
    """Outcome of binding an incoming event to a directory person."""

    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"


class ResolutionSource(StrEnum):
    """Which event field the resolver matched on."""

    IDENTITY = "identity"
    EMAIL = "email"


class UnresolvedReason(StrEnum):
    UNKNOWN_PERSON = "unknown_person"
    UNKNOWN_EMAIL = "unknown_email"
    MISSING_IDENTITY = "missing_identity"


@dataclass(slots=True, kw_only=True)
class ResolvedEvent:
    """Event attributed to a known person."""

    person: Person
    via: ResolutionSource
    status: Literal[ResolutionStatus.RESOLVED] = ResolutionStatus.RESOLVED


@dataclass(slots=True, kw_only=True)
class UnresolvedEvent:
    """Event that cannot be attributed; it carries no ledger information."""

    reason: UnresolvedReason
    status: Literal[ResolutionStatus.UNRESOLVED] = ResolutionStatus.UNRESOLVED


type EventResolution = ResolvedEvent | UnresolvedEvent


class IdentityOrder(StrEnum):
    """Which contact identity names a ledger record when both are present."""

    ROOT_FIRST = "root_first"
    PRIMARY_FIRST = "primary_first"


@dataclass(frozen=True, slots=True, kw_only=True)
class LedgerKeyPolicy:
    """How persisted records pick the person component of their ledger key.

    Events are always keyed by their resolved identity, which prefers the primary
    contact. ``ROOT_FIRST`` keys persisted records by their root contact instead,
    so a record owned by one primary contact under a different root contact is
    not found again by that primary contact's events. ``PRIMARY_FIRST`` keys both
    sides the same way. Which one is right is still open; ``ROOT_FIRST`` is the
    historical behaviour.
    """

    seed_order: IdentityOrder = IdentityOrder.ROOT_FIRST


@dataclass(slots=True)
class ChangeSet:
    """Dirty ledger records split by the storage operation they need."""

    to_insert: list[LedgerRecord] = field(default_factory=list["LedgerRecord"])
    to_update: list[LedgerRecord] = field(default_factory=list["LedgerRecord"])

    def __len__(self) -> int:
        return len(self.to_insert) + len(self.to_update)

    @property
    def is_empty(self) -> bool:
        return not self.to_insert and not self.to_update
