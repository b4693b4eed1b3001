"""Turn source-control and calendar observations into activity events.

Events are de-duplicated per person, activity and ledger month: the ledger only
records *that* an activity happened in a month, so one event per combination
carries all the information the merge needs.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from activity_sync.domain.model import MENTORING_ACTIVITY, ActivityEvent
from activity_sync.domain.time_windows import start_of_day

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import date

    from activity_sync.domain.model import CalendarEntry, RepositoryActivity, SourceRepository
    from activity_sync.domain.ports import CommitFetcher, MentoringCalendarRepository
    from activity_sync.domain.time_windows import DayWindow

log = getLogger(__name__)

type EventKey = tuple[str, str, int, int]


def _event_key(email: str, activity: str, day: date) -> EventKey:
    return (email, activity, day.year, day.month)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def collect_development_events(activity: Iterable[RepositoryActivity]) -> list[ActivityEvent]:
    """One event per commit author, repository activity type and month."""

    events: list[ActivityEvent] = []
    seen: set[EventKey] = set()
    skipped = 0
    for repository_activity in activity:
        label = repository_activity.repository.activity
        for branch in repository_activity.branches:
            for commit in branch.commits:
                if not commit.author_email:
                    skipped += 1
                    continue
                occurred_on = _as_utc(commit.created_at).date()
                key = _event_key(commit.author_email, label, occurred_on)
                if key in seen:
                    continue
                seen.add(key)
                events.append(
                    ActivityEvent(
                        activity=label,
                        occurred_on=occurred_on,
                        email=commit.author_email,
                    )
                )
    if skipped:
        log.debug("Skipped %s commits without author email", skipped)
    return events


def covers_day(entry: CalendarEntry, day: date) -> bool:
    """Whether a calendar entry overlaps any part of ``day``."""

    day_start = start_of_day(day)
    day_end = day_start + timedelta(days=1)
    return _as_utc(entry.start_time) < day_end and _as_utc(entry.end_time) >= day_start


def collect_mentoring_events(
    entries: Iterable[CalendarEntry],
    *,
    window: DayWindow,
    activity: str = MENTORING_ACTIVITY,
) -> list[ActivityEvent]:
    """One mentoring event per employee and month, dated on the first covered day."""

    entries = list(entries)
    events: list[ActivityEvent] = []
    seen: set[EventKey] = set()
    for day in window.days():
        for entry in entries:
            if not entry.employee_email or not covers_day(entry, day):
                continue
            key = _event_key(entry.employee_email, activity, day)
            if key in seen:
                continue
            seen.add(key)
            events.append(
                ActivityEvent(activity=activity, occurred_on=day, email=entry.employee_email)
            )
    return events


def collect_activity_events(
    *,
    fetch_commits: CommitFetcher,
    repositories: Sequence[SourceRepository],
    calendar: MentoringCalendarRepository,
    window: DayWindow,
    mentoring_activity: str = MENTORING_ACTIVITY,
) -> list[ActivityEvent]:
    """Gather development and mentoring events for ``window``."""

    development = collect_development_events(
        fetch_commits(repositories, since=window.start, until=window.end)
    )
    start, end = window.bounds()
    mentoring = collect_mentoring_events(
        calendar.entries_between(start, end),
        window=window,
        activity=mentoring_activity,
    )
    log.info(
        "Collected %s development and %s mentoring events for %s..%s",
        len(development),
        len(mentoring),
        window.start,
        window.end,
    )
    return [*development, *mentoring]
