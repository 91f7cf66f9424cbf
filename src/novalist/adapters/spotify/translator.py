"""Translate Spotify search payloads into domain match sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from novalist.domain.model import ArtistMatch, MatchSet, Thumbnail, TrackMatch

if TYPE_CHECKING:
    from .schema import SearchResponse, SpotifyArtist, SpotifyImage, SpotifyTrack


def translate_search_response(response: SearchResponse) -> MatchSet:
    tracks = [item for item in (response.tracks.items if response.tracks else []) if item]
    artists = [item for item in (response.artists.items if response.artists else []) if item]
    return MatchSet(
        tracks=[translate_track(track) for track in tracks if track.id],
        artists=[translate_artist(artist) for artist in artists],
    )


def translate_track(track: SpotifyTrack) -> TrackMatch:
    images = track.album.images if track.album is not None else []
    return TrackMatch(
        id=track.id or "",
        title=track.name,
        duration_seconds=round(track.duration_ms / 1000) if track.duration_ms else None,
        url=track.external_urls.get("spotify"),
        thumbnails=_thumbnails(images),
        artists=tuple(translate_artist(artist) for artist in track.artists),
    )


def translate_artist(artist: SpotifyArtist) -> ArtistMatch:
    return ArtistMatch(
        id=artist.id or "",
        name=artist.name,
        url=artist.external_urls.get("spotify"),
    )


def _thumbnails(images: list[SpotifyImage]) -> tuple[Thumbnail, ...]:
    # smallest first, so the last thumbnail is the largest one
    ordered = sorted(images, key=lambda image: image.width or 0)
    return tuple(
        Thumbnail(url=image.url, width=image.width, height=image.height) for image in ordered
    )
