from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003
from datetime import date

import httpx
import pytest

from activity_sync.adapters.delivery import ActivityDeliveryClient, DeliveryError
from activity_sync.adapters.http_resilience import ResilientClient
from activity_sync.config.delivery import DeliveryConfig
from activity_sync.config.http_resilience import ResilienceConfig, RetryPolicy
from tests.helpers.activities import make_event

SERVICE_URL = "https://activities.example/api/activities"


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    retries: int = 2,
) -> ActivityDeliveryClient:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    config = DeliveryConfig(
        service_url=SERVICE_URL,
        resilience=ResilienceConfig(
            name="delivery-test",
            retry=RetryPolicy(total=retries, backoff_factor=0, backoff_jitter=0),
            cache=None,
            default_headers={"Content-Type": "application/json"},
        ),
    )
    return ActivityDeliveryClient(config=config, client_factory=factory)


def test_posts_events_as_json_array() -> None:
    bodies: list[object] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert str(request.url) == SERVICE_URL
        assert request.headers["Content-Type"] == "application/json"
        bodies.append(json.loads(request.content))
        return httpx.Response(200)

    deliver = _client(handler)
    deliver(
        [
            make_event("Development", on=date(2024, 3, 14), email="a@x"),
            make_event("Mentoring", on=date(2024, 3, 14), person_id=7, paths=["B", "A"]),
        ]
    )

    assert bodies == [
        [
            {
                "UserId": None,
                "UserEmail": "a@x",
                "Date": "2024-03-14",
                "Activity": "Development",
                "Paths": [],
            },
            {
                "UserId": 7,
                "UserEmail": None,
                "Date": "2024-03-14",
                "Activity": "Mentoring",
                "Paths": ["A", "B"],
            },
        ]
    ]


def test_retries_server_errors_until_accepted() -> None:
    statuses = iter([503, 500, 200])
    attempts: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        status = next(statuses)
        attempts.append(status)
        return httpx.Response(status)

    _client(handler)([make_event(email="a@x")])

    assert attempts == [503, 500, 200]


def test_raises_when_retries_are_exhausted() -> None:
    attempts: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        attempts.append(1)
        return httpx.Response(502)

    with pytest.raises(DeliveryError) as excinfo:
        _client(handler, retries=2)([make_event(email="a@x")])

    assert len(attempts) == 3
    assert excinfo.value.status_code == 502


def test_client_errors_are_not_retried() -> None:
    attempts: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        _ = request
        attempts.append(1)
        return httpx.Response(400)

    with pytest.raises(DeliveryError):
        _client(handler)([make_event(email="a@x")])

    assert len(attempts) == 1


def test_network_failure_is_a_delivery_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(DeliveryError) as excinfo:
        _client(handler, retries=1)([make_event(email="a@x")])

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_empty_batch_is_not_sent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request {request.url}")

    _client(handler)([])
