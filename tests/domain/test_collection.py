from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from activity_sync.domain.collection import (
    collect_activity_events,
    collect_development_events,
    collect_mentoring_events,
    covers_day,
)
from activity_sync.domain.model import (
    MENTORING_ACTIVITY,
    Branch,
    CalendarEntry,
    Commit,
    RepositoryActivity,
    SourceRepository,
)
from activity_sync.domain.time_windows import DayWindow
from tests.helpers.activities import FakeCalendar

if TYPE_CHECKING:
    from collections.abc import Sequence

BACKEND = SourceRepository(host="https://git.example", project_id="12", activity="Development")
DOCS = SourceRepository(host="https://git.example", project_id="34", activity="Documentation")


def _commit(email: str | None, day: int = 14, month: int = 3) -> Commit:
    return Commit(author_email=email, created_at=datetime(2024, month, day, 9, tzinfo=UTC))


def _entry(email: str | None, start: datetime, end: datetime) -> CalendarEntry:
    return CalendarEntry(employee_email=email, start_time=start, end_time=end)


def test_one_event_per_author_and_activity() -> None:
    activity = [
        RepositoryActivity(
            repository=BACKEND,
            branches=[
                Branch(name="main", commits=[_commit("a@x"), _commit("a@x", day=15)]),
                Branch(name="feature", commits=[_commit("a@x"), _commit("b@x")]),
            ],
        ),
        RepositoryActivity(
            repository=DOCS,
            branches=[Branch(name="main", commits=[_commit("a@x")])],
        ),
    ]

    events = collect_development_events(activity)

    assert [(event.email, event.activity, event.occurred_on) for event in events] == [
        ("a@x", "Development", date(2024, 3, 14)),
        ("b@x", "Development", date(2024, 3, 14)),
        ("a@x", "Documentation", date(2024, 3, 14)),
    ]
    assert all(event.person_id is None and not event.paths for event in events)


def test_commits_in_different_months_stay_separate() -> None:
    activity = [
        RepositoryActivity(
            repository=BACKEND,
            branches=[Branch(name="main", commits=[_commit("a@x", 31, 1), _commit("a@x", 1, 2)])],
        )
    ]

    events = collect_development_events(activity)

    assert [event.occurred_on for event in events] == [date(2024, 1, 31), date(2024, 2, 1)]


def test_commits_without_author_email_are_skipped() -> None:
    activity = [
        RepositoryActivity(
            repository=BACKEND,
            branches=[Branch(name="main", commits=[_commit(None), _commit("")])],
        )
    ]

    assert collect_development_events(activity) == []


def test_covers_day_includes_overlapping_entries() -> None:
    day = date(2024, 3, 14)

    assert covers_day(
        _entry("a@x", datetime(2024, 3, 14, 10, tzinfo=UTC), datetime(2024, 3, 14, 11, tzinfo=UTC)),
        day,
    )
    assert covers_day(
        _entry("a@x", datetime(2024, 3, 1, tzinfo=UTC), datetime(2024, 3, 31, tzinfo=UTC)),
        day,
    )
    assert covers_day(_entry("a@x", datetime(2024, 3, 14, 10), datetime(2024, 3, 14, 11)), day)
    assert not covers_day(
        _entry("a@x", datetime(2024, 3, 15, tzinfo=UTC), datetime(2024, 3, 16, tzinfo=UTC)),
        day,
    )
    assert not covers_day(
        _entry("a@x", datetime(2024, 3, 12, tzinfo=UTC), datetime(2024, 3, 13, 23, tzinfo=UTC)),
        day,
    )


def test_mentoring_events_are_deduplicated_per_employee() -> None:
    window = DayWindow.for_day(date(2024, 3, 14))
    entries = [
        _entry("a@x", datetime(2024, 3, 14, 9, tzinfo=UTC), datetime(2024, 3, 14, 10, tzinfo=UTC)),
        _entry("a@x", datetime(2024, 3, 14, 14, tzinfo=UTC), datetime(2024, 3, 14, 15, tzinfo=UTC)),
        _entry("b@x", datetime(2024, 3, 10, tzinfo=UTC), datetime(2024, 3, 20, tzinfo=UTC)),
        _entry(None, datetime(2024, 3, 14, 9, tzinfo=UTC), datetime(2024, 3, 14, 10, tzinfo=UTC)),
    ]

    events = collect_mentoring_events(entries, window=window)

    assert [(event.email, event.activity, event.occurred_on) for event in events] == [
        ("a@x", MENTORING_ACTIVITY, date(2024, 3, 14)),
        ("b@x", MENTORING_ACTIVITY, date(2024, 3, 14)),
    ]


def test_mentoring_label_is_configurable() -> None:
    window = DayWindow.for_day(date(2024, 3, 14))
    entries = [
        _entry("a@x", datetime(2024, 3, 14, 9, tzinfo=UTC), datetime(2024, 3, 14, 10, tzinfo=UTC))
    ]

    events = collect_mentoring_events(entries, window=window, activity="Coaching")

    assert [event.activity for event in events] == ["Coaching"]


def test_collect_activity_events_combines_both_sources() -> None:
    window = DayWindow.for_day(date(2024, 3, 14))
    calls: list[tuple[Sequence[SourceRepository], date, date]] = []

    def fetch_commits(
        repositories: Sequence[SourceRepository],
        *,
        since: date,
        until: date,
    ) -> list[RepositoryActivity]:
        calls.append((repositories, since, until))
        return [
            RepositoryActivity(
                repository=BACKEND,
                branches=[Branch(name="main", commits=[_commit("a@x")])],
            )
        ]

    calendar = FakeCalendar(
        entries=[
            _entry(
                "m@x",
                datetime(2024, 3, 14, 9, tzinfo=UTC),
                datetime(2024, 3, 14, 10, tzinfo=UTC),
            )
        ]
    )

    events = collect_activity_events(
        fetch_commits=fetch_commits,
        repositories=[BACKEND],
        calendar=calendar,
        window=window,
    )

    assert [(event.email, event.activity) for event in events] == [
        ("a@x", "Development"),
        ("m@x", MENTORING_ACTIVITY),
    ]
    assert calls == [([BACKEND], date(2024, 3, 14), date(2024, 3, 15))]
    assert calendar.requested == [window.bounds()]


def test_commit_dates_are_taken_in_utc() -> None:
    cest = timezone(timedelta(hours=2))
    late_may = Commit(author_email="a@x", created_at=datetime(2024, 6, 1, 1, 30, tzinfo=cest))
    also_may = Commit(author_email="a@x", created_at=datetime(2024, 5, 30, 12, tzinfo=UTC))
    activity = [
        RepositoryActivity(
            repository=BACKEND,
            branches=[Branch(name="main", commits=[late_may, also_may])],
        )
    ]

    events = collect_development_events(activity)

    assert [event.occurred_on for event in events] == [date(2024, 5, 31)]
