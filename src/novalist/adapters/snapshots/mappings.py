"""Conversions between domain objects and snapshot models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from novalist.domain.model import (
    ArtistMatch,
    MatchSet,
    Playlist,
    Scope,
    Thumbnail,
    Track,
    TrackMatch,
)

from .schema import (
    ArtistMatchSnapshot,
    LookupCacheSnapshot,
    MatchSetSnapshot,
    PlaylistSnapshot,
    ScopeSnapshot,
    ThumbnailSnapshot,
    TrackMatchSnapshot,
    TrackSnapshot,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def artist_to_snapshot(artist: ArtistMatch) -> ArtistMatchSnapshot:
    return ArtistMatchSnapshot(id=artist.id, name=artist.name, url=artist.url)


def artist_from_snapshot(snapshot: ArtistMatchSnapshot) -> ArtistMatch:
    return ArtistMatch(id=snapshot.id, name=snapshot.name, url=snapshot.url)


def track_match_to_snapshot(match: TrackMatch) -> TrackMatchSnapshot:
    return TrackMatchSnapshot(
        id=match.id,
        title=match.title,
        duration_seconds=match.duration_seconds,
        url=match.url,
        thumbnails=[
            ThumbnailSnapshot(url=thumb.url, width=thumb.width, height=thumb.height)
            for thumb in match.thumbnails
        ],
        artists=[artist_to_snapshot(artist) for artist in match.artists],
    )


def track_match_from_snapshot(snapshot: TrackMatchSnapshot) -> TrackMatch:
    return TrackMatch(
        id=snapshot.id,
        title=snapshot.title,
        duration_seconds=snapshot.duration_seconds,
        url=snapshot.url,
        thumbnails=tuple(
            Thumbnail(url=thumb.url, width=thumb.width, height=thumb.height)
            for thumb in snapshot.thumbnails
        ),
        artists=tuple(artist_from_snapshot(artist) for artist in snapshot.artists),
    )


def match_set_to_snapshot(matches: MatchSet) -> MatchSetSnapshot:
    return MatchSetSnapshot(
        tracks=[track_match_to_snapshot(track) for track in matches.tracks],
        artists=[artist_to_snapshot(artist) for artist in matches.artists],
    )


def match_set_from_snapshot(snapshot: MatchSetSnapshot) -> MatchSet:
    return MatchSet(
        tracks=[track_match_from_snapshot(track) for track in snapshot.tracks],
        artists=[artist_from_snapshot(artist) for artist in snapshot.artists],
    )


def playlist_to_snapshot(playlist: Playlist) -> PlaylistSnapshot:
    scope = playlist.scope
    return PlaylistSnapshot(
        scope=ScopeSnapshot(
            kind=scope.kind,
            year=scope.year,
            month=scope.month,
            day=scope.day,
            name=scope.name,
        ),
        tracks=[
            TrackSnapshot(
                artist=track.artist,
                title=track.title,
                image_url=track.image_url,
                store_url=track.store_url,
                count=track.count,
                hour=track.hour,
                minute=track.minute,
                enrichment=(
                    track_match_to_snapshot(track.enrichment)
                    if track.enrichment is not None
                    else None
                ),
            )
            for track in playlist.tracks
        ],
    )


def playlist_from_snapshot(snapshot: PlaylistSnapshot) -> Playlist:
    scope = Scope(
        kind=snapshot.scope.kind,
        year=snapshot.scope.year,
        month=snapshot.scope.month,
        day=snapshot.scope.day,
        name=snapshot.scope.name,
    )
    tracks = [
        Track(
            artist=track.artist,
            title=track.title,
            image_url=track.image_url,
            store_url=track.store_url,
            count=track.count,
            hour=track.hour,
            minute=track.minute,
            enrichment=(
                track_match_from_snapshot(track.enrichment)
                if track.enrichment is not None
                else None
            ),
        )
        for track in snapshot.tracks
    ]
    return Playlist(scope=scope, tracks=tracks)


def lookup_cache_to_snapshot(entries: Mapping[str, MatchSet]) -> LookupCacheSnapshot:
    return LookupCacheSnapshot(
        matches={query: match_set_to_snapshot(matches) for query, matches in entries.items()}
    )


def lookup_cache_from_snapshot(snapshot: LookupCacheSnapshot) -> dict[str, MatchSet]:
    return {query: match_set_from_snapshot(matches) for query, matches in snapshot.matches.items()}
