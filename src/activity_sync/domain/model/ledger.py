"""Activity events and the per-person, per-month ledger they fold into."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

MENTORING_ACTIVITY: Final[str] = "Mentoring"
UNKNOWN_PERSON_ID: Final[int] = 0


@dataclass(kw_only=True)
class ActivityEvent:
    """A raw activity observation.

    ``person_id`` starts out empty for events that only carry an email address;
    resolution writes the matched identity back so later lookups are direct.
    """

    activity: str
    occurred_on: date
    person_id: int | None = None
    email: str | None = None
    paths: set[str] = field(default_factory=set[str])


@dataclass(frozen=True, slots=True, kw_only=True)
class PersistedActivityRecord:
    """A ledger row as loaded from storage."""

    persisted_id: int
    year: int
    month: int
    primary_contact_id: int | None = None
    root_contact_id: int | None = None
    activity_types: frozenset[str] = field(default_factory=frozenset[str])
    paths: frozenset[str] = field(default_factory=frozenset[str])


@dataclass(frozen=True, slots=True)
class LedgerKey:
    person_id: int
    year: int
    month: int

    @classmethod
    def for_date(cls, person_id: int, value: date) -> LedgerKey:
        return cls(person_id=person_id, year=value.year, month=value.month)


@dataclass(eq=False, kw_only=True)
class LedgerRecord:
    """Canonical aggregate of one person's activity in one month.

    Activity types and paths only ever grow, and ``dirty`` is never cleared once set.
    """

    key: LedgerKey
    persisted_id: int | None = None
    primary_contact_id: int | None = None
    root_contact_id: int | None = None
    activity_types: set[str] = field(default_factory=set[str])
    paths: set[str] = field(default_factory=set[str])
    dirty: bool = False

    @property
    def is_new(self) -> bool:
        return self.persisted_id is None

    @property
    def year(self) -> int:
        return self.key.year

    @property
    def month(self) -> int:
        return self.key.month

    def add_activity(self, activity: str) -> bool:
        if activity in self.activity_types:
            return False
        self.activity_types.add(activity)
        self.dirty = True
        return True

    def add_paths(self, paths: Iterable[str]) -> bool:
        missing = set(paths) - self.paths
        if not missing:
            return False
        self.paths |= missing
        self.dirty = True
        return True
