"""Spotipy-based search client used to enrich tracks."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import requests
import spotipy
from pydantic import ValidationError
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from novalist.config.spotify import SpotifyConfig, get_spotify_config
from novalist.domain.errors import SearchError
from novalist.domain.ports.search import SearchService

from .schema import SearchResponse
from .translator import translate_search_response

if TYPE_CHECKING:
    from novalist.domain.model import MatchSet

log = getLogger(__name__)

SEARCH_TYPES = "track,artist"


class SpotipySearchClient(Protocol):
    def search(
        self,
        q: str,
        limit: int = 10,
        offset: int = 0,
        type: str = "track",  # noqa: A002
        market: str | None = None,
    ) -> object: ...


class SpotifySearch:
    """Searches tracks and artists in a single Spotify call per query."""

    def __init__(
        self,
        *,
        config: SpotifyConfig | None = None,
        client: SpotipySearchClient | None = None,
    ) -> None:
        self._config = config or get_spotify_config()
        if client is None:
            auth_manager = SpotifyClientCredentials(
                client_id=self._config.client_id,
                client_secret=self._config.client_secret,
            )
            client = spotipy.Spotify(
                auth_manager=auth_manager,
                requests_timeout=self._config.requests_timeout,
            )
        self._client = client

    def search(self, query: str) -> MatchSet:
        try:
            raw_payload = self._client.search(
                q=query,
                limit=self._config.search_limit,
                type=SEARCH_TYPES,
                market=self._config.market,
            )
        except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as exc:
            raise SearchError(f"Spotify search failed for {query!r}: {exc}") from exc

        try:
            payload = SearchResponse.model_validate(raw_payload)
        except ValidationError as exc:
            raise SearchError(f"Unexpected Spotify search payload for {query!r}") from exc

        matches = translate_search_response(payload)
        log.debug(
            "Spotify search %r: %s tracks, %s artists",
            query,
            len(matches.tracks),
            len(matches.artists),
        )
        return matches


if TYPE_CHECKING:
    _search_check: SearchService = SpotifySearch()
