"""Search results attached to tracks as enrichment."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class Thumbnail:
    url: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True, slots=True)
class ArtistMatch:
    id: str
    name: str
    url: str | None = None

    @property
    def is_usable(self) -> bool:
        return bool(self.id)


@dataclass(frozen=True, slots=True)
class TrackMatch:
    """Best match returned by the search service for one track query."""

    id: str
    title: str
    duration_seconds: int | None = None
    url: str | None = None
    thumbnails: tuple[Thumbnail, ...] = ()
    artists: tuple[ArtistMatch, ...] = ()

    @property
    def artist_ids(self) -> tuple[str, ...]:
        return tuple(artist.id for artist in self.artists if artist.id)

    def copy(self) -> TrackMatch:
        return replace(self, thumbnails=tuple(self.thumbnails), artists=tuple(self.artists))


@dataclass(slots=True)
class MatchSet:
    """Everything one search call returned, in the service's ranking order."""

    tracks: list[TrackMatch] = field(default_factory=list["TrackMatch"])
    artists: list[ArtistMatch] = field(default_factory=list["ArtistMatch"])

    def first_track(self) -> TrackMatch | None:
        return self.tracks[0] if self.tracks else None

    def first_usable_artist(self) -> ArtistMatch | None:
        for artist in self.artists:
            if artist.is_usable:
                return artist
        return None
