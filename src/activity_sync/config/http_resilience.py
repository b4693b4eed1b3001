"""Retry, throttling and caching settings shared by the HTTP adapters."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})
TRANSIENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True, kw_only=True)
class RetryPolicy:
    """Retries after the first attempt; ``total=2`` means three attempts."""

    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    backoff_jitter: float = 1.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = frozenset({"GET", "POST"})
    status_forcelist: frozenset[int] = RETRYABLE_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = TRANSIENT_ERRORS

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ConfigurationError(f"Retry total must not be negative, got {self.total}")

    @classmethod
    def fixed_wait(cls, *, attempts: int, wait_seconds: float) -> RetryPolicy:
        """``attempts`` tries in total with the same pause before every retry."""

        return cls(
            total=attempts - 1,
            backoff_factor=wait_seconds,
            max_backoff_wait=wait_seconds,
            backoff_jitter=0.0,
        )

    @property
    def attempts(self) -> int:
        return self.total + 1


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float

    def __post_init__(self) -> None:
        if self.max_calls <= 0 or self.per_seconds <= 0:
            raise ConfigurationError(
                f"Rate limit needs positive values, got {self.max_calls}/{self.per_seconds}s"
            )


@dataclass(slots=True, frozen=True, kw_only=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True


@dataclass(slots=True, frozen=True, kw_only=True)
class ResilienceConfig:
    """Everything a ``ResilientClient`` needs to talk to one remote service."""

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    response_hooks: tuple[ResponseHook, ...] = ()
    default_headers: Mapping[str, str] | None = None
