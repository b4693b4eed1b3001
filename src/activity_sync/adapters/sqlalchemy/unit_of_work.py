"""SQLAlchemy-backed unit of work for ledger sync runs.

The adapter owns one process-wide engine: call :func:`startup` once (it creates
missing tables) before opening a unit of work, and :func:`shutdown` to dispose it.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from activity_sync.adapters.sqlalchemy.mappings import create_all_tables
from activity_sync.adapters.sqlalchemy.repositories import (
    SqlAlchemyActivityRecordRepository,
    SqlAlchemyContactRepository,
    SqlAlchemyMentoringCalendarRepository,
)
from activity_sync.config.storage import get_database_config
from activity_sync.domain.ports.unit_of_work import ActivityRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before (or re-)initialisation."""


class _EngineRegistry:
    def __init__(self) -> None:
        self.engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    def install(self, engine: Engine | None) -> None:
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False) if engine else None

    def sessions(self) -> sessionmaker[Session]:
        if self._sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised; call "
                "activity_sync.adapters.sqlalchemy.startup() first."
            )
        return self._sessions


_REGISTRY = _EngineRegistry()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for the configured database)."""

    if _REGISTRY.engine is not None and not force:
        raise StartupError("SQLAlchemy adapter already initialised; pass force=True to rebind.")

    if engine is None:
        database = get_database_config()
        engine = create_engine(database_uri or database.uri, echo=database.echo, future=True)
    log.info("Starting SQLAlchemy adapter on %s", engine.url.render_as_string())
    create_all_tables(engine)
    _REGISTRY.install(engine)


def configured_engine() -> Engine | None:
    return _REGISTRY.engine


def is_started() -> bool:
    return _REGISTRY.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _REGISTRY.engine is not None:
        _REGISTRY.engine.dispose()
    _REGISTRY.install(None)


class SqlAlchemyActivityUnitOfWork:
    """One session over the ledger, contact and calendar tables.

    Leaving the ``with`` block because of an exception rolls back; a clean exit
    without :meth:`commit` discards the work when the session closes.
    """

    def __init__(self) -> None:
        self._sessions = _REGISTRY.sessions()
        self._session: Session | None = None
        self._repositories: ActivityRepositories | None = None

    def __enter__(self) -> SqlAlchemyActivityUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already open")
        self._session = self._sessions()
        self._repositories = ActivityRepositories(
            activity_records=SqlAlchemyActivityRecordRepository(self._session),
            contacts=SqlAlchemyContactRepository(self._session),
            mentoring_calendar=SqlAlchemyMentoringCalendarRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not open")
        return self._session

    @property
    def repositories(self) -> ActivityRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from activity_sync.domain.ports.unit_of_work import ActivityUnitOfWork

    _uow_check: ActivityUnitOfWork = SqlAlchemyActivityUnitOfWork()
