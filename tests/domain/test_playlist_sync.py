from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from novalist.domain.errors import PersistenceError
from novalist.domain.lookup_cache import LookupCache
from novalist.domain.model import MatchSet, Playlist, Scope, ScopeKind, Track
from novalist.domain.playlist_sync import (
    build_all_time_playlist,
    build_month_playlist,
    build_year_playlist,
    collect_day,
    load_chain,
)
from novalist.domain.ports import RawTrack
from novalist.domain.time_windows import MonthWindow
from tests.helpers.fakes import (
    FakeDayFetcher,
    FakeSearch,
    InMemoryPlaylistRepository,
    track_match,
)


def _clock() -> datetime:
    return datetime(2024, 1, 4, 8, tzinfo=UTC)


def _raw(artist: str, title: str) -> RawTrack:
    return RawTrack(artist=artist, title=title, time="12:00")


def test_collect_day_stores_fetched_tracks() -> None:
    day = date(2024, 1, 1)
    fetcher = FakeDayFetcher(days={day: [_raw("A", "X"), _raw("A", "X")]})
    repository = InMemoryPlaylistRepository()

    playlist, from_storage = collect_day(day, fetcher=fetcher, repository=repository)

    assert playlist is not None
    assert not from_storage
    # raw occurrences are stored as heard
    assert [t.key for t in playlist] == ["a|x", "a|x"]
    assert repository.saves == [Scope.for_day(day)]


def test_collect_day_skips_days_already_stored() -> None:
    day = date(2024, 1, 1)
    stored = Playlist(scope=Scope.for_day(day), tracks=[Track(artist="a", title="x")])
    repository = InMemoryPlaylistRepository(playlists={stored.scope: stored})
    fetcher = FakeDayFetcher()

    playlist, from_storage = collect_day(day, fetcher=fetcher, repository=repository)

    assert playlist is stored
    assert from_storage
    assert fetcher.calls == []


def test_collect_day_refetches_unreadable_snapshots() -> None:
    day = date(2024, 1, 1)
    repository = InMemoryPlaylistRepository(unreadable={Scope.for_day(day)})
    fetcher = FakeDayFetcher(days={day: [_raw("a", "x")]})

    playlist, from_storage = collect_day(day, fetcher=fetcher, repository=repository)

    assert playlist is not None
    assert not from_storage
    assert fetcher.calls == [day]


def test_collect_day_does_not_store_empty_days() -> None:
    repository = InMemoryPlaylistRepository()

    playlist, _ = collect_day(date(2024, 1, 1), fetcher=FakeDayFetcher(), repository=repository)

    assert playlist is not None
    assert len(playlist) == 0
    assert repository.saves == []


def test_collect_day_reports_failed_fetches() -> None:
    day = date(2024, 1, 1)
    repository = InMemoryPlaylistRepository()

    playlist, _ = collect_day(day, fetcher=FakeDayFetcher(failing={day}), repository=repository)

    assert playlist is None
    assert repository.saves == []


def test_build_month_playlist_folds_days() -> None:
    fetcher = FakeDayFetcher(
        days={
            date(2024, 1, 1): [_raw("Daft Punk", "One More Time"), _raw("Air", "Sexy Boy")],
            date(2024, 1, 2): [_raw("Daft Punk", "One More Time")],
            date(2024, 1, 3): [_raw("Daft Punk", "One More Time")],
        },
        failing={date(2024, 1, 2)},
    )
    repository = InMemoryPlaylistRepository()
    search = FakeSearch(
        results={"one more time by daft punk": MatchSet(tracks=[track_match("One More Time")])}
    )

    result = build_month_playlist(
        MonthWindow(2024, 1),
        repository=repository,
        cache=LookupCache(search),
        fetcher=fetcher,
        clock=_clock,
    )

    month = result.playlist
    assert fetcher.calls == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    assert result.failed_days == [date(2024, 1, 2)]
    assert result.fetched_days == [date(2024, 1, 1), date(2024, 1, 3)]
    assert [(t.key, t.count) for t in month] == [
        ("daft punk|one more time", 2),
        ("air|sexy boy", 1),
    ]
    assert month.tracks[0].enrichment is not None
    assert result.enriched == 1
    assert repository.playlists[Scope.for_month(2024, 1)] is month


def test_build_month_playlist_keeps_day_counts_intact() -> None:
    day = date(2024, 1, 1)
    stored = Playlist(
        scope=Scope.for_day(day),
        tracks=[Track(artist="a", title="x"), Track(artist="a", title="x")],
    )
    repository = InMemoryPlaylistRepository(playlists={stored.scope: stored})

    build_month_playlist(
        MonthWindow(2024, 1),
        repository=repository,
        cache=LookupCache(FakeSearch()),
        fetcher=FakeDayFetcher(),
        clock=_clock,
    )

    assert [t.count for t in stored] == [1, 1]


def test_build_month_playlist_without_fetcher_reranks_stored_month() -> None:
    stored = Playlist(
        scope=Scope.for_month(2024, 1),
        tracks=[Track(artist="a", title="x", count=1), Track(artist="a", title="y", count=3)],
    )
    repository = InMemoryPlaylistRepository(playlists={stored.scope: stored})

    result = build_month_playlist(
        MonthWindow(2024, 1), repository=repository, cache=LookupCache(FakeSearch())
    )

    assert [t.title for t in result.playlist] == ["y", "x"]


def _store_month(
    repository: InMemoryPlaylistRepository, year: int, month: int, **counts: int
) -> Playlist:
    playlist = Playlist(
        scope=Scope.for_month(year, month),
        tracks=[Track(artist="a", title=title, count=count) for title, count in counts.items()],
    )
    repository.save(playlist)
    return playlist


def test_build_year_playlist() -> None:
    repository = InMemoryPlaylistRepository()
    _store_month(repository, 2023, 12, x=50)
    _store_month(repository, 2024, 1, x=1, y=2)
    _store_month(repository, 2024, 2, x=3)

    year = build_year_playlist(2024, repository=repository, cache=LookupCache(FakeSearch()))

    assert [(t.title, t.count) for t in year] == [("x", 4), ("y", 2)]
    assert repository.playlists[Scope.for_year(2024)] is year


def test_build_year_playlist_needs_months() -> None:
    with pytest.raises(PersistenceError, match="2024"):
        build_year_playlist(
            2024, repository=InMemoryPlaylistRepository(), cache=LookupCache(FakeSearch())
        )


def test_build_all_time_playlist() -> None:
    repository = InMemoryPlaylistRepository()
    _store_month(repository, 2023, 12, x=5)
    _store_month(repository, 2024, 1, x=1, y=2)

    everything = build_all_time_playlist(repository=repository, cache=LookupCache(FakeSearch()))

    assert [(t.title, t.count) for t in everything] == [("x", 6), ("y", 2)]
    assert ScopeKind.ALL_TIME in {scope.kind for scope in repository.playlists}


def test_load_chain_links_stored_months() -> None:
    repository = InMemoryPlaylistRepository()
    february = _store_month(repository, 2024, 2, x=1)
    january = _store_month(repository, 2024, 1, x=1)
    _store_month(repository, 2023, 5, x=1)

    chain = load_chain(repository, within=Scope.for_year(2024))

    assert list(chain) == [january, february]
