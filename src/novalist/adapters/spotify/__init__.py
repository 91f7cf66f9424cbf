"""Spotify search and playlist export adapter package."""

from __future__ import annotations

from .client import SpotifySearch
from .export import SpotifyPlaylistExporter
from .schema import SearchResponse, SpotifyArtist, SpotifyTrack
from .translator import translate_artist, translate_search_response, translate_track

__all__ = [
    "SearchResponse",
    "SpotifyArtist",
    "SpotifyPlaylistExporter",
    "SpotifySearch",
    "SpotifyTrack",
    "translate_artist",
    "translate_search_response",
    "translate_track",
]
