from __future__ import annotations

import pytest

from novalist.domain.export import export_playlist, export_title
from novalist.domain.model import Playlist, Scope, Track
from novalist.domain.ports import RemotePlaylist
from tests.helpers.fakes import FakePlaylistExporter, track_match


def _ranked(scope: Scope, *titles: str | None) -> Playlist:
    """Tracks in rank order; ``None`` marks a track without a match."""
    tracks: list[Track] = []
    for index, title in enumerate(titles):
        track = Track(artist="a", title=f"t{index}", count=len(titles) - index)
        if title is not None:
            track.enrichment = track_match(title)
        tracks.append(track)
    return Playlist(scope=scope, tracks=tracks)


def test_titles() -> None:
    assert export_title(_ranked(Scope.for_month(2024, 3))) == "Radio Nova - March 2024"
    assert export_title(_ranked(Scope.for_year(2023))) == "Radio Nova - Top 100 of 2023"
    assert export_title(_ranked(Scope.for_year(2023)), 20) == "Radio Nova - Top 20 of 2023"


def test_export_caps_at_top_n_and_reports_unmatched() -> None:
    playlist = _ranked(Scope.for_month(2024, 3), "x", None, "y", "z")
    exporter = FakePlaylistExporter()

    result = export_playlist(playlist, exporter, top_n=3, public=True)

    assert exporter.items == {"pl-1": ["id-x", "id-y"]}
    assert exporter.created == [("Radio Nova - March 2024", True)]
    assert result.added == 2
    assert result.unmatched == ["a|t1"]
    assert result.remote is not None
    assert result.remote.url == "https://open.spotify.com/playlist/pl-1"


def test_duplicate_matches_are_added_once() -> None:
    playlist = _ranked(Scope.for_month(2024, 3), "x", "x", "y")
    exporter = FakePlaylistExporter()

    export_playlist(playlist, exporter)

    assert exporter.items == {"pl-1": ["id-x", "id-y"]}


def test_existing_playlist_is_left_alone() -> None:
    existing = RemotePlaylist(id="old", name="Radio Nova - March 2024")
    exporter = FakePlaylistExporter(playlists={existing.name: existing})

    result = export_playlist(_ranked(Scope.for_month(2024, 3), "x"), exporter)

    assert result.already_exported
    assert result.remote == existing
    assert exporter.created == []


def test_existing_playlist_can_be_exported_again() -> None:
    existing = RemotePlaylist(id="old", name="Radio Nova - March 2024")
    exporter = FakePlaylistExporter(playlists={existing.name: existing})

    result = export_playlist(
        _ranked(Scope.for_month(2024, 3), "x"), exporter, skip_existing=False
    )

    assert not result.already_exported
    assert exporter.created == [("Radio Nova - March 2024", False)]


def test_nothing_is_created_without_matches() -> None:
    exporter = FakePlaylistExporter()

    result = export_playlist(_ranked(Scope.for_month(2024, 3), None, None), exporter)

    assert result.remote is None
    assert result.unmatched == ["a|t0", "a|t1"]
    assert exporter.created == []


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        export_playlist(_ranked(Scope.for_month(2024, 3), "x"), FakePlaylistExporter(), top_n=0)
