"""SQLAlchemy table metadata for the activity ledger and its inputs."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    func,
)

from activity_sync.domain.model import ContactRole

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class StringSetType(TypeDecorator[frozenset[str]]):
    """Stores a set of strings as a sorted JSON list."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Iterable[str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(sorted(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[str]:
        _ = dialect
        if value is None:
            return frozenset()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return frozenset()
        items = cast(list[Any], loaded)
        return frozenset(item for item in items if isinstance(item, str))


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

contact_assignment_table = Table(
    "contact_assignment",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("person_id", Integer, nullable=False),
    Column(
        "role",
        Enum(
            ContactRole,
            name="contact_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
    ),
    Column("email", String, nullable=True),
    Column("paths", StringSetType, nullable=False),
    Index("ix_contact_assignment_role", "role"),
)

activity_record_table = Table(
    "activity_record",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("year", Integer, nullable=False),
    Column("month", Integer, nullable=False),
    Column("primary_contact_id", Integer, nullable=True),
    Column("root_contact_id", Integer, nullable=True),
    Column("activity_types", StringSetType, nullable=False),
    Column("paths", StringSetType, nullable=False),
    Column(
        "updated_at",
        UTCDateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    ),
    Index("ix_activity_record_period", "year", "month"),
)

mentoring_calendar_entry_table = Table(
    "mentoring_calendar_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("employee_email", String, nullable=True),
    Column("start_time", UTCDateTime, nullable=False),
    Column("end_time", UTCDateTime, nullable=False),
    Index("ix_mentoring_calendar_entry_start_time", "start_time"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the ledger metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
