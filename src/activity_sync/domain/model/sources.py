"""Observations from the systems activities are collected from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class SourceRepository:
    """A watched GitLab project and the activity type its commits count as."""

    host: str
    project_id: str
    activity: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Commit:
    author_email: str | None
    created_at: datetime


@dataclass(slots=True, kw_only=True)
class Branch:
    name: str
    commits: list[Commit] = field(default_factory=list["Commit"])


@dataclass(slots=True, kw_only=True)
class RepositoryActivity:
    """Branches (with their commits) fetched for one repository."""

    repository: SourceRepository
    branches: list[Branch] = field(default_factory=list["Branch"])


@dataclass(frozen=True, slots=True, kw_only=True)
class CalendarEntry:
    """A mentoring calendar entry for one employee."""

    employee_email: str | None
    start_time: datetime
    end_time: datetime
