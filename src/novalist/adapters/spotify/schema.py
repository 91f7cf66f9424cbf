"""Minimal Pydantic models for the Spotify search endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyImage(SpotifyBaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class SpotifyArtist(SpotifyBaseModel):
    id: str | None = None
    name: str
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyAlbum(SpotifyBaseModel):
    id: str | None = None
    name: str
    images: list[SpotifyImage] = Field(default_factory=list["SpotifyImage"])


class SpotifyTrack(SpotifyBaseModel):
    id: str | None = None
    name: str
    duration_ms: int | None = None
    album: SpotifyAlbum | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    total: int | None = None


class TrackPage(SpotifyPage):
    items: list[SpotifyTrack | None] = Field(default_factory=list["SpotifyTrack | None"])


class ArtistPage(SpotifyPage):
    items: list[SpotifyArtist | None] = Field(default_factory=list["SpotifyArtist | None"])


class SearchResponse(SpotifyBaseModel):
    tracks: TrackPage | None = None
    artists: ArtistPage | None = None


class SpotifyUser(SpotifyBaseModel):
    id: str


class SpotifyPlaylist(SpotifyBaseModel):
    id: str
    name: str
    external_urls: dict[str, str] = Field(default_factory=dict)


class PlaylistPage(SpotifyPage):
    items: list[SpotifyPlaylist | None] = Field(default_factory=list["SpotifyPlaylist | None"])
