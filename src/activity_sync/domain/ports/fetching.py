"""Ports for fetching and delivering activity data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from activity_sync.domain.model import ActivityEvent, RepositoryActivity, SourceRepository


@runtime_checkable
class CommitFetcher(Protocol):
    """Callable port returning every branch with its commits for each repository."""

    def __call__(
        self,
        repositories: Sequence[SourceRepository],
        *,
        since: date,
        until: date,
    ) -> list[RepositoryActivity]: ...


@runtime_checkable
class ActivityPublisher(Protocol):
    """Callable port handing collected events to the ledger service."""

    def __call__(self, events: Sequence[ActivityEvent]) -> None: ...


__all__ = ["ActivityPublisher", "CommitFetcher"]
