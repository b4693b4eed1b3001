"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from activity_sync.adapters.delivery import ActivityDeliveryClient
from activity_sync.adapters.gitlab import GitLabFetcher
from activity_sync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyActivityUnitOfWork,
    is_started,
    startup,
)
from activity_sync.config import get_gitlab_config, get_reconciliation_config
from activity_sync.domain.collection import collect_activity_events
from activity_sync.domain.data_integration import SyncLedgerResult, sync_activity_ledger
from activity_sync.domain.ports.unit_of_work import ActivityUnitOfWork
from activity_sync.domain.reconciliation import LoggingObserver, ReconciliationEngine
from activity_sync.domain.time_windows import DayWindow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from activity_sync.config import ReconciliationConfig
    from activity_sync.domain.model import ActivityEvent, SourceRepository
    from activity_sync.domain.ports import ActivityPublisher, CommitFetcher

UnitOfWorkFactory = Callable[[], ActivityUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyActivityUnitOfWork


def collect_activities(
    *,
    window: DayWindow | None = None,
    fetch_commits: CommitFetcher | None = None,
    repositories: Sequence[SourceRepository] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reconciliation: ReconciliationConfig | None = None,
) -> list[ActivityEvent]:
    """Collect development and mentoring events for one window (default: yesterday)."""

    effective_window = window or DayWindow.previous_day()
    if fetch_commits is None or repositories is None:
        gitlab = get_gitlab_config()
        fetch_commits = fetch_commits or GitLabFetcher(config=gitlab)
        repositories = gitlab.repositories if repositories is None else repositories
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    config = reconciliation or get_reconciliation_config()

    log.info(
        "Collecting activities for %s..%s from %s repositories",
        effective_window.start,
        effective_window.end,
        len(repositories),
    )
    with effective_uow() as uow:
        return collect_activity_events(
            fetch_commits=fetch_commits,
            repositories=repositories,
            calendar=uow.repositories.mentoring_calendar,
            window=effective_window,
            mentoring_activity=config.mentoring_activity,
        )


def deliver_activities(
    events: Sequence[ActivityEvent],
    *,
    publisher: ActivityPublisher | None = None,
) -> None:
    """Hand collected events to the activity service."""

    effective_publisher = publisher or ActivityDeliveryClient()
    log.info("Delivering %s activity events", len(events))
    effective_publisher(events)


def reconcile_activities(
    events: Sequence[ActivityEvent],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reconciliation: ReconciliationConfig | None = None,
) -> SyncLedgerResult:
    """Merge events into the stored activity ledger."""

    config = reconciliation or get_reconciliation_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    engine = ReconciliationEngine(policy=config.key_policy, observer=LoggingObserver())
    log.info(
        "Starting ledger reconciliation: events=%s, seed_order=%s",
        len(events),
        config.key_policy.seed_order,
    )

    result = sync_activity_ledger(events, unit_of_work_factory=effective_uow, engine=engine)

    log.info(
        f"Finished ledger reconciliation: inserted={result.inserted}, "
        f"updated={result.updated}, unresolved={result.summary.unresolved}"
    )
    return result
