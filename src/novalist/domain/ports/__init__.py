"""Domain port definitions."""

from __future__ import annotations

from .export import PlaylistExporter, RemotePlaylist
from .fetching import DayPlaylistFetcher, RawTrack, RawTrackPage
from .persistence import LookupCacheRepository, PlaylistRepository
from .search import SearchService

__all__ = [
    "DayPlaylistFetcher",
    "LookupCacheRepository",
    "PlaylistExporter",
    "PlaylistRepository",
    "RawTrack",
    "RawTrackPage",
    "RemotePlaylist",
    "SearchService",
]
