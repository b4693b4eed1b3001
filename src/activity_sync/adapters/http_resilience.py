"""Async HTTP client combining retries, throttling and an optional response cache.

Layering, outermost first:
1) ``aiolimiter`` throttles calls per client
2) ``hishel`` answers repeated GETs from the cache when caching is enabled
3) ``httpx-retries`` retries transient failures
4) the network transport (replaceable in tests)
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager, nullcontext
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from activity_sync.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from activity_sync.config.storage import get_storage_config

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, RequestContent, URLTypes

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        backoff_jitter=policy.backoff_jitter,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=sorted(policy.allowed_methods),
        status_forcelist=sorted(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


def _cache_storage(cache: CacheConfig | None) -> AsyncSqliteStorage | None:
    if cache is None or not cache.enabled:
        return None
    if cache.backend == "memory":
        database_path = ":memory:"
    elif cache.backend == "sqlite":
        database_path = cache.sqlite_path or str(get_storage_config().http_cache_path())
    else:
        raise ValueError(f"Unsupported cache backend: {cache.backend}")
    return AsyncSqliteStorage(
        database_path=database_path,
        default_ttl=cache.default_ttl_seconds,
        refresh_ttl_on_access=cache.refresh_ttl_on_access,
    )


def _open_client(
    config: ResilienceConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> httpx.AsyncClient:
    options: dict[str, object] = {
        "timeout": config.timeout_seconds,
        "transport": RetryTransport(transport=transport, retry=build_retry(config.retry)),
        "headers": dict(config.default_headers or {}),
    }
    if config.base_url is not None:
        options["base_url"] = config.base_url
    if config.response_hooks:
        options["event_hooks"] = {"response": list(config.response_hooks)}

    storage = _cache_storage(config.cache)
    if storage is None:
        return httpx.AsyncClient(**options)  # type: ignore[arg-type]
    return AsyncCacheClient(storage=storage, **options)  # type: ignore[arg-type]


class ResilientClient:
    """Async client for one remote service described by a ``ResilienceConfig``.

    ``transport`` replaces the network layer underneath the retries; tests pass an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        limit = config.ratelimit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds) if limit else None
        self._client = _open_client(config, transport)

    @property
    def name(self) -> str:
        return self.config.name

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        async with self._throttle():
            response = await self._client.request(method, url, **kwargs)
        log.debug("%s %s %s -> %s", self.name, method, response.request.url, response.status_code)
        return response

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    def _throttle(self) -> AbstractAsyncContextManager[object]:
        if self._limiter is None:
            return nullcontext()
        return self._limiter
