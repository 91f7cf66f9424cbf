from __future__ import annotations

import pytest
import spotipy

from novalist.adapters.spotify.export import ADD_BATCH_SIZE, SpotifyPlaylistExporter
from novalist.config import MissingConfigurationError
from novalist.domain.errors import ExportError
from novalist.domain.ports import RemotePlaylist
from tests.helpers.spotify import FakeSpotipyPlaylistClient


def test_find_playlist_walks_every_page() -> None:
    client = FakeSpotipyPlaylistClient(["Road trip", "Focus", "Radio Nova - March 2024"])
    exporter = SpotifyPlaylistExporter(client=client)

    found = exporter.find_playlist("radio nova - march 2024")

    assert found == RemotePlaylist(
        id="existing-2",
        name="Radio Nova - March 2024",
        url="https://open.spotify.com/playlist/existing-2",
    )
    assert client.list_calls == [0, 2]


def test_find_playlist_returns_none_when_absent() -> None:
    client = FakeSpotipyPlaylistClient(["Road trip"])

    assert SpotifyPlaylistExporter(client=client).find_playlist("Radio Nova - 2024") is None


def test_create_playlist_for_current_user() -> None:
    client = FakeSpotipyPlaylistClient()
    exporter = SpotifyPlaylistExporter(client=client)

    remote = exporter.create_playlist("Radio Nova - March 2024", description="d", public=False)

    assert remote.id == "new-1"
    assert client.created == [
        {
            "user": "listener",
            "name": "Radio Nova - March 2024",
            "public": False,
            "description": "d",
        }
    ]


def test_add_tracks_in_batches() -> None:
    client = FakeSpotipyPlaylistClient()
    track_ids = [f"track-{index}" for index in range(ADD_BATCH_SIZE * 2 + 5)]

    SpotifyPlaylistExporter(client=client).add_tracks("pl", track_ids)

    assert [len(items) for _, items in client.added] == [ADD_BATCH_SIZE, ADD_BATCH_SIZE, 5]
    assert [item for _, items in client.added for item in items] == track_ids


def test_spotify_failures_become_export_errors() -> None:
    client = FakeSpotipyPlaylistClient(
        error=spotipy.SpotifyException(403, -1, "Insufficient client scope")
    )

    with pytest.raises(ExportError, match="create playlist"):
        SpotifyPlaylistExporter(client=client).create_playlist("x", description="d", public=True)


def test_exporter_needs_a_redirect_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "client")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")

    with pytest.raises(MissingConfigurationError, match="SPOTIFY_REDIRECT_URI"):
        SpotifyPlaylistExporter()
