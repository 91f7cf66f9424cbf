"""Application services that collect, build and aggregate playlists."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.aggregation import YEARLY_TOP_N, aggregate_all_time, aggregate_year
from novalist.domain.errors import PersistenceError, TransientFetchError
from novalist.domain.model import Playlist, Scope, ScopeKind, Track
from novalist.domain.ranking import PlaylistChain

if TYPE_CHECKING:
    from datetime import date

    from novalist.domain.lookup_cache import LookupCache
    from novalist.domain.ports import DayPlaylistFetcher, PlaylistRepository
    from novalist.domain.time_windows import Clock, MonthWindow

log = getLogger(__name__)


@dataclass(slots=True)
class MonthBuildResult:
    """Outcome of building one month playlist."""

    playlist: Playlist
    fetched_days: list[date] = field(default_factory=list["date"])
    cached_days: list[date] = field(default_factory=list["date"])
    failed_days: list[date] = field(default_factory=list["date"])
    enriched: int = 0


def _load_existing(repository: PlaylistRepository, scope: Scope) -> Playlist | None:
    if not repository.exists(scope):
        return None
    try:
        return repository.load(scope)
    except PersistenceError:
        log.warning("Stored playlist for %s is unreadable, fetching it again", scope, exc_info=True)
        return None


def collect_day(
    day: date,
    *,
    fetcher: DayPlaylistFetcher,
    repository: PlaylistRepository,
) -> tuple[Playlist | None, bool]:
    """Return the raw playlist for ``day`` and whether it came from storage.

    Days already on disk are never fetched again. A day whose fetch fails is
    logged and reported as ``None``; it does not affect other days.
    """

    scope = Scope.for_day(day)
    existing = _load_existing(repository, scope)
    if existing is not None:
        return existing, True

    try:
        raw_tracks = fetcher(day)
    except TransientFetchError:
        log.exception("Giving up on %s", day.isoformat())
        return None, False

    playlist = Playlist(scope=scope, tracks=[Track.from_raw(raw) for raw in raw_tracks])
    if playlist.tracks:
        repository.save(playlist)
    else:
        log.warning("No tracks found for %s, not storing the day", day.isoformat())
    return playlist, False


def build_month_playlist(
    window: MonthWindow,
    *,
    repository: PlaylistRepository,
    cache: LookupCache,
    fetcher: DayPlaylistFetcher | None = None,
    clock: Clock | None = None,
) -> MonthBuildResult:
    """Fold the days of a month into a ranked, enriched month playlist.

    Without a fetcher the stored month playlist is reloaded and only sorted
    and enriched again.
    """

    scope = Scope.for_month(window.year, window.month)
    if fetcher is None:
        month = repository.load(scope)
        result = MonthBuildResult(playlist=month)
    else:
        month = Playlist(scope=scope)
        result = MonthBuildResult(playlist=month)
        days = window.days(clock=clock) if clock is not None else window.days()
        log.info("Collecting %s days for %s", len(days), scope.title)
        for day in days:
            day_playlist, from_storage = collect_day(day, fetcher=fetcher, repository=repository)
            if day_playlist is None:
                result.failed_days.append(day)
                continue
            (result.cached_days if from_storage else result.fetched_days).append(day)
            month.add_tracks(track.copy() for track in day_playlist.tracks)

    month.sort()
    result.enriched = month.populate_enrichment(cache)
    repository.save(month)
    log.info(
        "Built %s: %s tracks, %s plays, %s days fetched, %s from storage, %s failed",
        scope.title,
        len(month),
        month.total_plays(),
        len(result.fetched_days),
        len(result.cached_days),
        len(result.failed_days),
    )
    return result


def load_playlists(
    repository: PlaylistRepository,
    kind: ScopeKind,
    *,
    within: Scope | None = None,
) -> list[Playlist]:
    """Load every stored playlist of ``kind``, skipping unreadable ones."""

    playlists: list[Playlist] = []
    for scope in repository.list_scopes(kind):
        if within is not None and not within.contains(scope):
            continue
        try:
            playlists.append(repository.load(scope))
        except PersistenceError:
            log.exception("Skipping unreadable playlist %s", scope)
    return playlists


def build_year_playlist(
    year: int,
    *,
    repository: PlaylistRepository,
    cache: LookupCache,
    top_n: int | None = YEARLY_TOP_N,
) -> Playlist:
    months = load_playlists(repository, ScopeKind.MONTH, within=Scope.for_year(year))
    if not months:
        raise PersistenceError(f"No month playlists stored for {year}")
    playlist = aggregate_year(months, year, top_n=top_n, cache=cache)
    repository.save(playlist)
    return playlist


def build_all_time_playlist(
    *,
    repository: PlaylistRepository,
    cache: LookupCache,
    top_n: int | None = None,
) -> Playlist:
    months = load_playlists(repository, ScopeKind.MONTH)
    if not months:
        raise PersistenceError("No month playlists stored yet")
    playlist = aggregate_all_time(months, top_n=top_n, cache=cache)
    repository.save(playlist)
    return playlist


def load_chain(
    repository: PlaylistRepository,
    kind: ScopeKind = ScopeKind.MONTH,
    *,
    within: Scope | None = None,
) -> PlaylistChain:
    """Link stored playlists of one kind chronologically for rank deltas."""

    return PlaylistChain.link(load_playlists(repository, kind, within=within))
