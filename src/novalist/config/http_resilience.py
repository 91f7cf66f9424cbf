"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]
# receives the decoded body of a 200 response
ShouldCacheHook = Callable[[str], bool]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retry schedule handed to ``httpx_retries``.

    POST is retried too because the playlist endpoint only reads data.
    """

    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(
        default_factory=lambda: frozenset({"GET", "HEAD", "OPTIONS", "POST"})
    )
    # the site answers 403 when it throttles scrapers
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({403, 429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    should_cache: ShouldCacheHook | None = None

    @classmethod
    def sqlite(cls, path: Path, *, should_cache: ShouldCacheHook | None = None) -> CacheConfig:
        return cls(backend="sqlite", sqlite_path=str(path), should_cache=should_cache)


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = None
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None

    def with_response_hooks(self, *hooks: ResponseHook) -> ResilienceConfig:
        """Copy of this config with ``hooks`` appended to the response hooks."""
        return replace(self, response_hooks=(*self.response_hooks, *hooks))
