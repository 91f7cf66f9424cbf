"""Pydantic snapshot models for playlists and the lookup cache.

Every field round-trips, enrichment included. Unknown fields are ignored and
the enrichment slot defaults to empty so that older files keep loading.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from novalist.domain.model import ScopeKind

SNAPSHOT_VERSION = 1


class SnapshotModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ThumbnailSnapshot(SnapshotModel):
    url: str
    width: int | None = None
    height: int | None = None


class ArtistMatchSnapshot(SnapshotModel):
    id: str
    name: str
    url: str | None = None


class TrackMatchSnapshot(SnapshotModel):
    id: str
    title: str
    duration_seconds: int | None = None
    url: str | None = None
    thumbnails: list[ThumbnailSnapshot] = Field(default_factory=list["ThumbnailSnapshot"])
    artists: list[ArtistMatchSnapshot] = Field(default_factory=list["ArtistMatchSnapshot"])


class MatchSetSnapshot(SnapshotModel):
    tracks: list[TrackMatchSnapshot] = Field(default_factory=list["TrackMatchSnapshot"])
    artists: list[ArtistMatchSnapshot] = Field(default_factory=list["ArtistMatchSnapshot"])


class TrackSnapshot(SnapshotModel):
    artist: str
    title: str
    image_url: str = ""
    store_url: str = ""
    count: int = Field(default=1, ge=0)
    hour: int | None = None
    minute: int | None = None
    enrichment: TrackMatchSnapshot | None = None


class ScopeSnapshot(SnapshotModel):
    kind: ScopeKind
    year: int | None = None
    month: int | None = None
    day: int | None = None
    name: str | None = None


class PlaylistSnapshot(SnapshotModel):
    version: int = SNAPSHOT_VERSION
    scope: ScopeSnapshot
    tracks: list[TrackSnapshot] = Field(default_factory=list["TrackSnapshot"])


class LookupCacheSnapshot(SnapshotModel):
    version: int = SNAPSHOT_VERSION
    matches: dict[str, MatchSetSnapshot] = Field(default_factory=dict)
