"""Activity service delivery configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DELIVERY_ATTEMPTS = 3
DELIVERY_RETRY_WAIT_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class DeliveryConfig:
    """Where collected activities are posted to."""

    service_url: str
    resilience: ResilienceConfig


def default_delivery_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="activity-service",
        retry=RetryPolicy.fixed_wait(
            attempts=DELIVERY_ATTEMPTS,
            wait_seconds=DELIVERY_RETRY_WAIT_SECONDS,
        ),
        default_headers={"Content-Type": "application/json"},
    )


def get_delivery_config(*, resilience: ResilienceConfig | None = None) -> DeliveryConfig:
    values = require_env_vars(("ACTIVITY_SERVICE_URL",))
    return DeliveryConfig(
        service_url=values["ACTIVITY_SERVICE_URL"],
        resilience=resilience or default_delivery_resilience(),
    )
