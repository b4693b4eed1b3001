"""HTTP client delivering collected activity events to the activity service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from activity_sync.adapters.http_resilience import ResilientClient
from activity_sync.config.delivery import DeliveryConfig, get_delivery_config

from .translator import encode_events

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from activity_sync.config.http_resilience import ResilienceConfig
    from activity_sync.domain.model import ActivityEvent
    from activity_sync.domain.ports import ActivityPublisher

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class DeliveryError(RuntimeError):
    """Raised when the activity service does not accept a batch after all retries."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class ActivityDeliveryClient:
    """POST a batch of events as one JSON array.

    Retries (with their waits) come from the resilience config's retry transport.
    """

    config: DeliveryConfig = field(default_factory=get_delivery_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, events: Sequence[ActivityEvent]) -> None:
        if not events:
            log.info("No activity events to deliver")
            return
        asyncio.run(self._deliver_async(events))

    async def _deliver_async(self, events: Sequence[ActivityEvent]) -> None:
        body = encode_events(events)
        async with self.client_factory(self.config.resilience) as client:
            try:
                response = await client.post(self.config.service_url, content=body)
            except httpx.HTTPError as exc:
                raise DeliveryError(f"Delivering activities failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            log.error(
                "Activity service rejected %s events: %s %s",
                len(events),
                response.status_code,
                response.reason_phrase,
            )
            raise DeliveryError(
                f"Activity service answered {response.status_code}",
                status_code=response.status_code,
            )
        log.info("Delivered %s activity events to %s", len(events), self.config.service_url)


if TYPE_CHECKING:
    _publisher_check: ActivityPublisher = ActivityDeliveryClient()
