"""Translate between activity events and their wire payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from activity_sync.domain.model import ActivityEvent

from .schema import ActivityEventBatch, ActivityEventPayload

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path


def to_payload(event: ActivityEvent) -> ActivityEventPayload:
    return ActivityEventPayload(
        user_id=event.person_id,
        user_email=event.email,
        occurred_on=event.occurred_on,
        activity=event.activity,
        paths=sorted(event.paths),
    )


def to_event(payload: ActivityEventPayload) -> ActivityEvent:
    return ActivityEvent(
        activity=payload.activity,
        occurred_on=payload.occurred_on,
        person_id=payload.user_id,
        email=payload.user_email,
        paths=set(payload.paths),
    )


def encode_events(events: Iterable[ActivityEvent]) -> bytes:
    """Serialise events as the JSON array the activity service accepts."""

    payloads = [to_payload(event) for event in events]
    return ActivityEventBatch.dump_json(payloads, by_alias=True)


def decode_events(data: str | bytes) -> list[ActivityEvent]:
    return [to_event(payload) for payload in ActivityEventBatch.validate_json(data)]


def dump_events(events: Sequence[ActivityEvent], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_events(events))


def load_events(path: Path) -> list[ActivityEvent]:
    return decode_events(path.read_bytes())
