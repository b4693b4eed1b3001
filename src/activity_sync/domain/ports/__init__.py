"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ActivityPublisher, CommitFetcher
from .persistence import (
    ActivityRecordRepository,
    ContactRepository,
    MentoringCalendarRepository,
)
from .unit_of_work import ActivityRepositories, ActivityUnitOfWork

__all__ = [
    "ActivityPublisher",
    "ActivityRecordRepository",
    "ActivityRepositories",
    "ActivityUnitOfWork",
    "CommitFetcher",
    "ContactRepository",
    "MentoringCalendarRepository",
]
