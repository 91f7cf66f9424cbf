"""HTTP fetcher for Radio Nova's daily playlist pages."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Self

import httpx

from novalist.adapters.http_resilience import ResilienceConfig, ResilientClient
from novalist.config.nova import NovaConfig, get_nova_config
from novalist.domain.errors import TransientFetchError
from novalist.domain.ports.fetching import DayPlaylistFetcher, RawTrack, RawTrackPage

from .parser import NovaMarkupError, extract_nonce, has_playlist_items, parse_playlist_page

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date
    from types import TracebackType

log = getLogger(__name__)

# WordPress answers these when the nonce is missing or expired
_REJECTED_BODIES = frozenset({"0", "-1"})


def should_cache_page(text: str) -> bool:
    """Only fragments that list tracks are cached; the landing page carries the nonce."""
    return has_playlist_items(text) and "ajax_nonce" not in text


def _default_config() -> NovaConfig:
    return get_nova_config(cache_predicate=should_cache_page)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


async def _log_error_response(response: httpx.Response) -> None:
    if response.is_error:
        log.warning(
            "Nova answered %s for %s %s",
            response.status_code,
            response.request.method,
            response.request.url,
        )


@dataclass(slots=True)
class NovaPlaylistFetcher:
    """Fetches day playlists page by page through one long-lived client.

    The fetcher owns an event loop runner and a single ``ResilientClient``, so
    the rate limit and the retry schedule apply across every page and day of
    a run. Use it as a context manager to release both.
    """

    config: NovaConfig = field(default_factory=_default_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _runner: asyncio.Runner | None = field(default=None, init=False, repr=False)
    _client: ResilientClient | None = field(default=None, init=False, repr=False)
    _nonce: str | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> Self:
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._runner.close()
            self._runner = None
            self._client = None
            self._nonce = None

    def fetch_page(self, day: date, page: int) -> RawTrackPage:
        if page < 1:
            raise ValueError("Pages are numbered from 1")
        runner, client = self._ensure_open()
        return runner.run(self._fetch_page_async(client, day, page))

    def __call__(self, day: date) -> list[RawTrack]:
        tracks: list[RawTrack] = []
        page = 1
        while True:
            result = self.fetch_page(day, page)
            tracks.extend(result.tracks)
            log.debug("%s page %s: %s items", day.isoformat(), page, len(result.tracks))
            if not result.has_more:
                break
            page += 1
        log.info("Fetched %s tracks for %s over %s pages", len(tracks), day.isoformat(), page)
        return tracks

    def _ensure_open(self) -> tuple[asyncio.Runner, ResilientClient]:
        if self._runner is None:
            self._runner = asyncio.Runner()
        if self._client is None:
            self._client = self._runner.run(self._open_client())
        return self._runner, self._client

    async def _open_client(self) -> ResilientClient:
        return self.client_factory(self.config.resilience.with_response_hooks(_log_error_response))

    async def _fetch_page_async(
        self,
        client: ResilientClient,
        day: date,
        page: int,
    ) -> RawTrackPage:
        body = await self._request_page(client, day, page)
        if body.strip() in _REJECTED_BODIES:
            log.info("Nonce rejected for %s page %s, refreshing it", day.isoformat(), page)
            self._nonce = None
            body = await self._request_page(client, day, page)
            if body.strip() in _REJECTED_BODIES:
                raise TransientFetchError(
                    f"Nova rejected the request for {day.isoformat()}, page {page}"
                )

        tracks = parse_playlist_page(body)
        has_more = bool(tracks) and page < self.config.max_pages
        return RawTrackPage(tracks=tracks, has_more=has_more)

    async def _request_page(self, client: ResilientClient, day: date, page: int) -> str:
        nonce = await self._get_nonce(client)
        form = {
            "action": "loadmore_programs",
            "date": day.isoformat(),
            "time": self.config.day_end_time,
            "page": str(page),
            "radio": str(self.config.radio_id),
        }
        try:
            # the query string mirrors the form (minus the nonce) so that cached
            # pages are keyed by day and page
            response = await client.post(
                self.config.ajax_path,
                params=form,
                data={**form, "afp_nonce": nonce},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransientFetchError(
                f"Failed to retrieve playlist for {day.isoformat()}, page {page}: "
                f"status {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransientFetchError(
                f"Failed to retrieve playlist for {day.isoformat()}, page {page}: {exc}"
            ) from exc
        return response.text

    async def _get_nonce(self, client: ResilientClient) -> str:
        if self._nonce is not None:
            return self._nonce
        try:
            response = await client.get(self.config.playlist_path)
            response.raise_for_status()
            self._nonce = extract_nonce(response.text)
        except httpx.HTTPError as exc:
            raise TransientFetchError(f"Failed to load the playlist landing page: {exc}") from exc
        except NovaMarkupError as exc:
            raise TransientFetchError(str(exc)) from exc
        log.debug("Using ajax nonce %s", self._nonce)
        return self._nonce


if TYPE_CHECKING:
    _fetcher_check: DayPlaylistFetcher = NovaPlaylistFetcher()
