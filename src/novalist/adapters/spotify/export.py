"""Spotipy-based playlist exporter."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, TypeVar

import requests
import spotipy
from pydantic import BaseModel, ValidationError
from spotipy.cache_handler import CacheFileHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from novalist.config.spotify import SpotifyExportConfig, get_spotify_export_config
from novalist.domain.errors import ExportError
from novalist.domain.ports.export import PlaylistExporter, RemotePlaylist

from .schema import PlaylistPage, SpotifyPlaylist, SpotifyUser

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

log = getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# playlist_add_items accepts at most this many items per call
ADD_BATCH_SIZE = 100
PLAYLIST_PAGE_SIZE = 50

_SPOTIFY_ERRORS = (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException)


class SpotipyPlaylistClient(Protocol):
    def current_user(self) -> object: ...

    def current_user_playlists(self, limit: int = 50, offset: int = 0) -> object: ...

    def user_playlist_create(
        self,
        user: str,
        name: str,
        public: bool = True,  # noqa: FBT001, FBT002
        collaborative: bool = False,  # noqa: FBT001, FBT002
        description: str = "",
    ) -> object: ...

    def playlist_add_items(
        self,
        playlist_id: str,
        items: Sequence[str],
        position: int | None = None,
    ) -> object: ...


def _call(action: str, model: type[T], request: Callable[[], object]) -> T:
    try:
        raw_payload = request()
    except _SPOTIFY_ERRORS as exc:
        raise ExportError(f"Spotify failed to {action}: {exc}") from exc
    try:
        return model.model_validate(raw_payload)
    except ValidationError as exc:
        raise ExportError(f"Unexpected Spotify payload when trying to {action}") from exc


def _remote(playlist: SpotifyPlaylist) -> RemotePlaylist:
    return RemotePlaylist(
        id=playlist.id,
        name=playlist.name,
        url=playlist.external_urls.get("spotify"),
    )


class SpotifyPlaylistExporter:
    """Creates playlists in the authorised user's Spotify account."""

    def __init__(
        self,
        *,
        config: SpotifyExportConfig | None = None,
        client: SpotipyPlaylistClient | None = None,
    ) -> None:
        if client is None:
            effective = config or get_spotify_export_config()
            cache_handler = (
                CacheFileHandler(cache_path=str(effective.token_cache_path))
                if effective.token_cache_path is not None
                else None
            )
            auth_manager = SpotifyOAuth(
                client_id=effective.client_id,
                client_secret=effective.client_secret,
                redirect_uri=effective.redirect_uri,
                scope=" ".join(effective.scope),
                cache_handler=cache_handler,
            )
            client = spotipy.Spotify(
                auth_manager=auth_manager,
                requests_timeout=effective.requests_timeout,
            )
        self._client = client
        self._user_id: str | None = None

    def iter_playlists(self) -> Iterator[RemotePlaylist]:
        offset = 0
        while True:
            page = _call(
                "list playlists",
                PlaylistPage,
                lambda: self._client.current_user_playlists(
                    limit=PLAYLIST_PAGE_SIZE, offset=offset
                ),
            )
            items = page.items
            if not items:
                return
            for item in items:
                if item is not None:
                    yield _remote(item)
            if page.next is None:
                return
            offset += len(items)

    def find_playlist(self, name: str) -> RemotePlaylist | None:
        wanted = name.strip().casefold()
        for playlist in self.iter_playlists():
            if playlist.name.strip().casefold() == wanted:
                return playlist
        return None

    def create_playlist(self, name: str, *, description: str, public: bool) -> RemotePlaylist:
        user_id = self._current_user_id()
        created = _call(
            f"create playlist {name!r}",
            SpotifyPlaylist,
            lambda: self._client.user_playlist_create(
                user_id, name, public=public, description=description
            ),
        )
        log.info("Created Spotify playlist %s (%s)", created.name, created.id)
        return _remote(created)

    def add_tracks(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        for start in range(0, len(track_ids), ADD_BATCH_SIZE):
            batch = list(track_ids[start : start + ADD_BATCH_SIZE])
            try:
                self._client.playlist_add_items(playlist_id, batch)
            except _SPOTIFY_ERRORS as exc:
                raise ExportError(
                    f"Spotify failed to add {len(batch)} tracks to {playlist_id}: {exc}"
                ) from exc
            log.debug("Added %s tracks to %s", len(batch), playlist_id)

    def _current_user_id(self) -> str:
        if self._user_id is None:
            user = _call("read the current user", SpotifyUser, self._client.current_user)
            self._user_id = user.id
        return self._user_id


if TYPE_CHECKING:
    _exporter_check: PlaylistExporter = SpotifyPlaylistExporter()
