from __future__ import annotations

import json
from datetime import date
from typing import TYPE_CHECKING

import pytest

from activity_sync.domain.data_integration import SyncLedgerResult
from activity_sync.domain.reconciliation import MergeSummary
from activity_sync.ui import cli as cli_module
from tests.helpers.activities import make_event

if TYPE_CHECKING:
    from pathlib import Path

    from activity_sync.domain.model import ActivityEvent
    from activity_sync.domain.time_windows import DayWindow


def _result() -> SyncLedgerResult:
    return SyncLedgerResult(received=1, inserted=1, updated=0, summary=MergeSummary(resolved=1))


def test_collect_defaults_to_delivery(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    events = [make_event(email="a@x")]

    def fake_collect(*, window: DayWindow | None) -> list[ActivityEvent]:
        captured["window"] = window
        return events

    def fake_deliver(delivered: list[ActivityEvent]) -> None:
        captured["delivered"] = delivered

    monkeypatch.setattr(cli_module, "collect_activities", fake_collect)
    monkeypatch.setattr(cli_module, "deliver_activities", fake_deliver)

    cli_module.main(["collect"])

    assert captured["window"] is None
    assert captured["delivered"] is events


def test_collect_with_day_writes_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_collect(*, window: DayWindow | None) -> list[ActivityEvent]:
        captured["window"] = window
        return [make_event("Dev", on=date(2024, 3, 14), email="a@x")]

    def fake_deliver(_: list[ActivityEvent]) -> None:
        raise AssertionError("collect --output must not deliver")

    monkeypatch.setattr(cli_module, "collect_activities", fake_collect)
    monkeypatch.setattr(cli_module, "deliver_activities", fake_deliver)
    target = tmp_path / "events.json"

    cli_module.main(["collect", "--day", "2024-03-14", "--output", str(target)])

    window = captured["window"]
    assert window is not None
    assert window.start == date(2024, 3, 14)  # type: ignore[attr-defined]
    assert json.loads(target.read_text())[0]["UserEmail"] == "a@x"


def test_reconcile_reads_input_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    source = tmp_path / "events.json"
    source.write_text(
        json.dumps([{"UserId": 1, "Date": "2024-05-20", "Activity": "Mentoring", "Paths": ["A"]}])
    )
    received: list[ActivityEvent] = []

    def fake_reconcile(events: list[ActivityEvent]) -> SyncLedgerResult:
        received.extend(events)
        return _result()

    monkeypatch.setattr(cli_module, "reconcile_activities", fake_reconcile)

    cli_module.main(["reconcile", "--input", str(source)])

    assert received == [make_event("Mentoring", on=date(2024, 5, 20), person_id=1, paths=["A"])]


def test_run_collects_then_reconciles(monkeypatch: pytest.MonkeyPatch) -> None:
    events = [make_event(email="a@x")]
    calls: list[str] = []

    def fake_collect(*, window: DayWindow | None) -> list[ActivityEvent]:
        calls.append("collect")
        assert window is not None
        return events

    def fake_reconcile(received: list[ActivityEvent]) -> SyncLedgerResult:
        calls.append("reconcile")
        assert received is events
        return _result()

    monkeypatch.setattr(cli_module, "collect_activities", fake_collect)
    monkeypatch.setattr(cli_module, "reconcile_activities", fake_reconcile)

    cli_module.main(["run", "--day", "2024-03-14"])

    assert calls == ["collect", "reconcile"]


def test_invalid_day_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["collect", "--day", "yesterday"])

    assert excinfo.value.code == 2


def test_reconcile_requires_input() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile"])

    assert excinfo.value.code == 2


def test_failures_exit_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_collect(*, window: DayWindow | None) -> list[ActivityEvent]:
        raise RuntimeError(f"GitLab unreachable for {window}")

    monkeypatch.setattr(cli_module, "collect_activities", fake_collect)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["run"])

    assert excinfo.value.code == 1
