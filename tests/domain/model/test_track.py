from __future__ import annotations

import logging

import pytest

from novalist.domain.lookup_cache import LookupCache
from novalist.domain.model import ArtistMatch, MatchSet, Thumbnail, Track, TrackMatch
from novalist.domain.ports import RawTrack
from tests.helpers.fakes import FakeSearch, track_match


def test_from_raw_normalises_artist_and_title() -> None:
    raw = RawTrack(
        artist="  Khruangbin / Leon  Bridges ",
        title="Texas  Sun",
        time="14h05",
        image_url=" https://img.example/cover.jpg ",
        store_url="https://open.spotify.com/track/abc",
    )

    track = Track.from_raw(raw)

    assert track.artist == "khruangbin and leon bridges"
    assert track.title == "texas sun"
    assert track.key == "khruangbin and leon bridges|texas sun"
    assert (track.hour, track.minute) == (14, 5)
    assert track.image_url == "https://img.example/cover.jpg"
    assert track.count == 1


def test_from_raw_ignores_unparsable_time() -> None:
    track = Track.from_raw(RawTrack(artist="a", title="b", time="midnight"))

    assert track.hour is None
    assert track.minute is None


def test_key_is_not_renormalised() -> None:
    track = Track(artist="Air", title="La Femme d'Argent")

    assert track.key == "Air|La Femme d'Argent"


def test_populate_enrichment_uses_title_by_artist_query() -> None:
    match = track_match("Texas Sun")
    search = FakeSearch(results={"texas sun by khruangbin": MatchSet(tracks=[match])})
    cache = LookupCache(search)
    track = Track(artist="khruangbin", title="texas sun")

    assert track.populate_enrichment(cache) is True

    assert track.enrichment is match
    assert search.calls == ["texas sun by khruangbin"]


def test_populate_enrichment_never_overwrites() -> None:
    existing = track_match("original")
    search = FakeSearch(results={"b by a": MatchSet(tracks=[track_match("other")])})
    track = Track(artist="a", title="b", enrichment=existing)

    assert track.populate_enrichment(LookupCache(search)) is False

    assert track.enrichment is existing
    assert search.calls == []


def test_populate_enrichment_leaves_slot_empty_when_nothing_matches(
    caplog: pytest.LogCaptureFixture,
) -> None:
    track = Track(artist="nobody", title="nothing")

    with caplog.at_level(logging.INFO):
        assert track.populate_enrichment(LookupCache(FakeSearch())) is False

    assert track.enrichment is None
    assert "No match for nothing by nobody" in caplog.text


def test_populate_enrichment_survives_search_errors() -> None:
    search = FakeSearch(failing={"b by a"})
    cache = LookupCache(search)
    track = Track(artist="a", title="b")

    assert track.populate_enrichment(cache) is False
    assert track.enrichment is None
    # failures are not remembered, a later pass searches again
    assert "b by a" not in cache


def test_title_mismatch_warns_but_keeps_match(caplog: pytest.LogCaptureFixture) -> None:
    match = track_match("Something Else Entirely")
    search = FakeSearch(results={"texas sun by khruangbin": MatchSet(tracks=[match])})
    track = Track(artist="khruangbin", title="texas sun")

    with caplog.at_level(logging.WARNING):
        track.populate_enrichment(LookupCache(search))

    assert track.enrichment is match
    assert "Possible bad match" in caplog.text


def test_title_match_ignores_accents_and_featuring(caplog: pytest.LogCaptureFixture) -> None:
    match = track_match("Café (feat. Someone)")
    search = FakeSearch(results={"cafe by x": MatchSet(tracks=[match])})
    track = Track(artist="x", title="cafe")

    with caplog.at_level(logging.WARNING):
        track.populate_enrichment(LookupCache(search))

    assert "Possible bad match" not in caplog.text


def test_copy_is_independent() -> None:
    original = Track(
        artist="a",
        title="b",
        count=4,
        hour=10,
        minute=30,
        enrichment=TrackMatch(id="x", title="b", thumbnails=(Thumbnail(url="t"),)),
    )

    copied = original.copy()
    copied.count += 1

    assert copied.key == original.key
    assert original.count == 4
    assert copied.enrichment == original.enrichment
    assert copied.enrichment is not original.enrichment
    assert copied.hour is None


def test_read_helpers() -> None:
    track = Track(
        artist="a",
        title="b",
        image_url="https://img.example/scraped.jpg",
        enrichment=TrackMatch(
            id="x",
            title="b",
            duration_seconds=3725,
            url="https://open.spotify.com/track/x",
            thumbnails=(Thumbnail(url="small", width=64), Thumbnail(url="large", width=640)),
            artists=(ArtistMatch(id="art", name="A", url="https://open.spotify.com/artist/art"),),
        ),
    )

    assert track.thumb_url == "large"
    assert track.match_url == "https://open.spotify.com/track/x"
    assert track.duration_label == "1:02:05"
    assert track.primary_artist_url() == "https://open.spotify.com/artist/art"


def test_read_helpers_without_enrichment() -> None:
    track = Track(artist="a", title="b", image_url="scraped")

    assert track.thumb_url == "scraped"
    assert track.match_url == ""
    assert track.duration_label == ""
    assert track.primary_artist_url() == "#"


def test_primary_artist_url_falls_back_to_artist_search() -> None:
    artist = ArtistMatch(id="kh", name="Khruangbin", url="https://open.spotify.com/artist/kh")
    search = FakeSearch(results={"khruangbin": MatchSet(artists=[artist])})
    track = Track(
        artist="khruangbin",
        title="texas sun",
        enrichment=TrackMatch(id="x", title="texas sun", artists=(ArtistMatch(id="", name="?"),)),
    )

    assert track.primary_artist_url(LookupCache(search)) == "https://open.spotify.com/artist/kh"
