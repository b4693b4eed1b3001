"""Activity service delivery adapter."""

from __future__ import annotations

from .client import ActivityDeliveryClient, DeliveryError
from .schema import ActivityEventPayload
from .translator import (
    decode_events,
    dump_events,
    encode_events,
    load_events,
    to_event,
    to_payload,
)

__all__ = [
    "ActivityDeliveryClient",
    "ActivityEventPayload",
    "DeliveryError",
    "decode_events",
    "dump_events",
    "encode_events",
    "load_events",
    "to_event",
    "to_payload",
]
