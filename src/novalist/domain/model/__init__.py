"""Public domain model surface."""

from __future__ import annotations

from novalist.domain.model.enums import ScopeKind
from novalist.domain.model.matches import ArtistMatch, MatchSet, Thumbnail, TrackMatch
from novalist.domain.model.playlist import Playlist
from novalist.domain.model.scope import MONTH_NAMES, Scope, month_from_name, month_name
from novalist.domain.model.track import Track

__all__ = [
    "MONTH_NAMES",
    "ArtistMatch",
    "MatchSet",
    "Playlist",
    "Scope",
    "ScopeKind",
    "Thumbnail",
    "Track",
    "TrackMatch",
    "month_from_name",
    "month_name",
]
