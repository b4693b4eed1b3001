"""Utilities for constraining collection runs to specific days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=UTC)


@dataclass(frozen=True)
class DayWindow:
    """Whole days ``[start, end)`` a collection run looks at."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError("Day window start must be before end")

    @classmethod
    def for_day(cls, day: date) -> DayWindow:
        return cls(start=day, end=day + timedelta(days=1))

    @classmethod
    def previous_day(cls, *, clock: Clock = _utcnow) -> DayWindow:
        """The day before ``clock()``, the window of a nightly run."""

        today = clock().astimezone(UTC).date()
        return cls.for_day(today - timedelta(days=1))

    @property
    def day(self) -> date:
        return self.start

    def days(self) -> Iterator[date]:
        current = self.start
        while current < self.end:
            yield current
            current += timedelta(days=1)

    def bounds(self) -> tuple[datetime, datetime]:
        """Return the window as UTC datetimes."""

        return start_of_day(self.start), start_of_day(self.end)


__all__ = ["Clock", "DayWindow", "start_of_day"]
