"""JSON snapshot persistence for playlists and the lookup cache."""

from __future__ import annotations

from .store import GzipLookupCacheRepository, JsonPlaylistRepository

__all__ = ["GzipLookupCacheRepository", "JsonPlaylistRepository"]
