from __future__ import annotations

from datetime import date

import pytest

from activity_sync.domain.data_integration import sync_activity_ledger
from activity_sync.domain.model import ContactRole
from activity_sync.domain.reconciliation import (
    DirectoryUnavailableError,
    IdentityOrder,
    LedgerKeyPolicy,
    PreconditionError,
    ReconciliationEngine,
)
from tests.helpers.activities import (
    FakeActivityRecordRepository,
    FakeContactRepository,
    FakeUnitOfWork,
    make_assignment,
    make_event,
    make_persisted,
)


def _unit_of_work(
    *,
    records: FakeActivityRecordRepository | None = None,
    contacts: FakeContactRepository | None = None,
) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        records=records or FakeActivityRecordRepository(),
        contacts=contacts
        or FakeContactRepository(
            primary=[make_assignment(1, "a@x"), make_assignment(2, "b@x")],
            root=[make_assignment(1), make_assignment(3, "root@x")],
        ),
    )


def test_sync_inserts_new_and_updates_changed_records() -> None:
    records = FakeActivityRecordRepository(
        [
            make_persisted(10, month=5, primary=1, root=1, activities=["Dev"]),
            make_persisted(11, month=5, primary=2, activities=["Dev"]),
        ]
    )
    uow = _unit_of_work(records=records)

    result = sync_activity_ledger(
        [
            make_event("Mentoring", on=date(2024, 5, 2), email="a@x"),
            make_event("Dev", on=date(2024, 5, 2), email="b@x"),
            make_event("Dev", on=date(2024, 6, 2), email="b@x", paths=["Ops"]),
            make_event("Dev", on=date(2024, 6, 2), email="nobody@x"),
        ],
        unit_of_work_factory=lambda: uow,
    )

    assert (result.received, result.inserted, result.updated) == (4, 1, 1)
    assert result.summary.unresolved == 1
    assert uow.committed
    assert [record.persisted_id for record in records.updated] == [10]
    assert records.records[10].activity_types == frozenset({"Dev", "Mentoring"})
    inserted = records.added[0]
    assert inserted.persisted_id == 12
    assert records.records[12].paths == frozenset({"Ops"})
    assert (inserted.year, inserted.month, inserted.primary_contact_id) == (2024, 6, 2)


def test_second_sync_of_same_events_writes_nothing() -> None:
    records = FakeActivityRecordRepository()
    events = [make_event("Dev", on=date(2024, 5, 2), email="a@x")]

    first = sync_activity_ledger(events, unit_of_work_factory=lambda: _unit_of_work(records=records))
    second = sync_activity_ledger(
        [make_event("Dev", on=date(2024, 5, 2), email="a@x")],
        unit_of_work_factory=lambda: _unit_of_work(records=records),
    )

    assert (first.inserted, first.updated) == (1, 0)
    assert (second.inserted, second.updated) == (0, 0)
    assert len(records.records) == 1


def test_unavailable_contact_list_aborts_before_writing() -> None:
    records = FakeActivityRecordRepository()
    uow = _unit_of_work(
        records=records,
        contacts=FakeContactRepository(unavailable=ContactRole.ROOT),
    )

    with pytest.raises(DirectoryUnavailableError) as excinfo:
        sync_activity_ledger([make_event(email="a@x")], unit_of_work_factory=lambda: uow)

    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert uow.rolled_back
    assert not uow.committed
    assert records.added == []


def test_failing_ledger_load_is_a_precondition_error() -> None:
    records = FakeActivityRecordRepository()
    records.fail_on_list = RuntimeError("db down")
    uow = _unit_of_work(records=records)

    with pytest.raises(PreconditionError, match="db down"):
        sync_activity_ledger([make_event(email="a@x")], unit_of_work_factory=lambda: uow)

    assert uow.rolled_back


def test_engine_policy_is_used() -> None:
    records = FakeActivityRecordRepository(
        [make_persisted(10, month=5, primary=2, root=3, activities=["Dev"])]
    )
    engine = ReconciliationEngine(policy=LedgerKeyPolicy(seed_order=IdentityOrder.PRIMARY_FIRST))

    result = sync_activity_ledger(
        [make_event("QA", on=date(2024, 5, 7), email="b@x")],
        unit_of_work_factory=lambda: _unit_of_work(records=records),
        engine=engine,
    )

    assert (result.inserted, result.updated) == (0, 1)
