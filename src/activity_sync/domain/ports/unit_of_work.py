"""Transaction boundary around the repositories a ledger sync run touches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Self

if TYPE_CHECKING:
    from types import TracebackType

    from activity_sync.domain.ports.persistence import (
        ActivityRecordRepository,
        ContactRepository,
        MentoringCalendarRepository,
    )


@dataclass(slots=True)
class ActivityRepositories:
    activity_records: ActivityRecordRepository
    contacts: ContactRepository
    mentoring_calendar: MentoringCalendarRepository


class ActivityUnitOfWork(Protocol):
    """Context manager handing out :class:`ActivityRepositories` for one session.

    Nothing is stored unless :meth:`commit` is called before the block exits.
    """

    @property
    def repositories(self) -> ActivityRepositories: ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
