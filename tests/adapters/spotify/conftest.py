"""Shared fixtures for Spotify adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from novalist.adapters.spotify.client import SpotifySearch
from novalist.config.spotify import SpotifyConfig
from tests.helpers.spotify import FakeSpotipyClient

SpotifyPayload = dict[str, object]
FIXTURES = Path(__file__).resolve().parents[2] / "data" / "spotify"


def _load_fixture(name: str) -> SpotifyPayload:
    return json.loads((FIXTURES / name).read_text())


@pytest.fixture
def search_payload() -> SpotifyPayload:
    return _load_fixture("search_texas_sun.json")


@pytest.fixture
def spotify_config() -> SpotifyConfig:
    return SpotifyConfig(client_id="client", client_secret="secret", search_limit=3, market="FR")


@pytest.fixture
def fake_spotipy(search_payload: SpotifyPayload) -> FakeSpotipyClient:
    return FakeSpotipyClient(search_payload)


@pytest.fixture
def spotify_search(
    spotify_config: SpotifyConfig, fake_spotipy: FakeSpotipyClient
) -> SpotifySearch:
    return SpotifySearch(config=spotify_config, client=fake_spotipy)
