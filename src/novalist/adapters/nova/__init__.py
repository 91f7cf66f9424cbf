"""Radio Nova scraping adapter."""

from __future__ import annotations

from .client import NovaPlaylistFetcher, should_cache_page
from .parser import NovaMarkupError, extract_nonce, parse_playlist_page

__all__ = [
    "NovaMarkupError",
    "NovaPlaylistFetcher",
    "extract_nonce",
    "parse_playlist_page",
    "should_cache_page",
]
