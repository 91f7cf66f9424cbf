"""Spotify search and playlist export configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import require_env_vars
from .storage import get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

    from .storage import StorageConfig

DEFAULT_SEARCH_LIMIT = 5
DEFAULT_SEARCH_MARKET = "FR"
SPOTIFY_TIMEOUT_SECONDS = 20
SPOTIFY_TOKEN_FILENAME = "spotify-token.json"


class SpotifyScopes:
    playlist_export: tuple[str, ...] = (
        "playlist-read-private",
        "playlist-modify-public",
        "playlist-modify-private",
    )


@dataclass(frozen=True)
class SpotifyConfig:
    client_id: str
    client_secret: str
    search_limit: int = DEFAULT_SEARCH_LIMIT
    market: str | None = DEFAULT_SEARCH_MARKET
    requests_timeout: int = SPOTIFY_TIMEOUT_SECONDS


@dataclass(frozen=True)
class SpotifyExportConfig:
    """User-authorised access for creating playlists."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: tuple[str, ...] = SpotifyScopes.playlist_export
    token_cache_path: Path | None = None
    requests_timeout: int = SPOTIFY_TIMEOUT_SECONDS


def get_spotify_config() -> SpotifyConfig:
    values = require_env_vars(("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET"))
    return SpotifyConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
    )


def get_spotify_export_config(*, storage: StorageConfig | None = None) -> SpotifyExportConfig:
    values = require_env_vars(
        ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET", "SPOTIFY_REDIRECT_URI")
    )
    storage_config = storage or get_storage_config()
    return SpotifyExportConfig(
        client_id=values["SPOTIFY_CLIENT_ID"],
        client_secret=values["SPOTIFY_CLIENT_SECRET"],
        redirect_uri=values["SPOTIFY_REDIRECT_URI"],
        token_cache_path=storage_config.ensure_data_dir() / SPOTIFY_TOKEN_FILENAME,
    )
