"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.adapters.nova import NovaPlaylistFetcher
from novalist.adapters.snapshots import GzipLookupCacheRepository, JsonPlaylistRepository
from novalist.adapters.spotify import SpotifyPlaylistExporter, SpotifySearch
from novalist.config.spotify import get_spotify_export_config
from novalist.config.storage import StorageConfig, get_storage_config
from novalist.domain.aggregation import YEARLY_TOP_N
from novalist.domain.errors import ExportError, PersistenceError
from novalist.domain.export import EXPORT_TOP_N, ExportResult, export_playlist
from novalist.domain.lookup_cache import lookup_cache_session
from novalist.domain.model import Scope, ScopeKind
from novalist.domain.playlist_sync import (
    MonthBuildResult,
    build_all_time_playlist,
    build_month_playlist,
    build_year_playlist,
    load_chain,
)
from novalist.domain.time_windows import resolve_month

if TYPE_CHECKING:
    from collections.abc import Sequence

    from novalist.domain.model import Playlist
    from novalist.domain.ports import DayPlaylistFetcher, PlaylistExporter, SearchService
    from novalist.domain.ranking import PlaylistChain
    from novalist.domain.time_windows import Clock, MonthWindow

log = getLogger(__name__)

SUMMARY_SIZE = 10


def _repositories(
    storage: StorageConfig | None,
) -> tuple[JsonPlaylistRepository, GzipLookupCacheRepository]:
    effective = storage or get_storage_config()
    return (
        JsonPlaylistRepository(effective.playlists_dir()),
        GzipLookupCacheRepository(effective.lookup_cache_path()),
    )


def _log_summary(playlist: Playlist, limit: int = SUMMARY_SIZE) -> None:
    for position, track in enumerate(playlist.tracks[:limit], start=1):
        log.info("%3d. %s %s", position, track, track.match_url or track.store_url)


def update_month(
    month: int | None = None,
    year: int | None = None,
    *,
    fetch: bool = True,
    storage: StorageConfig | None = None,
    search: SearchService | None = None,
    fetcher: DayPlaylistFetcher | None = None,
    clock: Clock | None = None,
) -> MonthBuildResult:
    """Collect the days of a month and rebuild its ranked playlist.

    With ``fetch`` disabled the stored month playlist is only re-sorted and
    enriched again.
    """

    window = resolve_month(month, year, clock=clock) if clock else resolve_month(month, year)
    [result] = update_months(
        [window], fetch=fetch, storage=storage, search=search, fetcher=fetcher, clock=clock
    )
    return result


def update_months(
    windows: Sequence[MonthWindow],
    *,
    fetch: bool = True,
    storage: StorageConfig | None = None,
    search: SearchService | None = None,
    fetcher: DayPlaylistFetcher | None = None,
    clock: Clock | None = None,
) -> list[MonthBuildResult]:
    """Rebuild several month playlists in order.

    All months share one lookup cache session and one fetcher, so the cache
    is written once and the rate limit holds across the whole range.
    """

    playlists, lookups = _repositories(storage)
    results: list[MonthBuildResult] = []

    with ExitStack() as stack:
        cache = stack.enter_context(lookup_cache_session(lookups, search or SpotifySearch()))
        effective_fetcher: DayPlaylistFetcher | None = None
        if fetch:
            effective_fetcher = fetcher or stack.enter_context(NovaPlaylistFetcher())
        for window in windows:
            log.info("Updating %s (fetch=%s)", Scope.for_month(window.year, window.month), fetch)
            results.append(
                build_month_playlist(
                    window,
                    repository=playlists,
                    cache=cache,
                    fetcher=effective_fetcher,
                    clock=clock,
                )
            )

    for result in results:
        if result.failed_days:
            log.warning(
                "Could not fetch %s days of %s: %s",
                len(result.failed_days),
                result.playlist.title,
                ", ".join(day.isoformat() for day in result.failed_days),
            )
        _log_summary(result.playlist)
    return results


def update_year(
    year: int,
    *,
    top_n: int | None = YEARLY_TOP_N,
    storage: StorageConfig | None = None,
    search: SearchService | None = None,
) -> Playlist:
    """Aggregate the stored months of ``year`` into its top playlist."""

    playlists, lookups = _repositories(storage)
    with lookup_cache_session(lookups, search or SpotifySearch()) as cache:
        playlist = build_year_playlist(year, repository=playlists, cache=cache, top_n=top_n)
    _log_summary(playlist)
    return playlist


def update_all_time(
    *,
    top_n: int | None = None,
    storage: StorageConfig | None = None,
    search: SearchService | None = None,
) -> Playlist:
    playlists, lookups = _repositories(storage)
    with lookup_cache_session(lookups, search or SpotifySearch()) as cache:
        playlist = build_all_time_playlist(repository=playlists, cache=cache, top_n=top_n)
    _log_summary(playlist)
    return playlist


def show_chain(
    year: int | None = None,
    *,
    storage: StorageConfig | None = None,
    limit: int = SUMMARY_SIZE,
) -> PlaylistChain:
    """Log the head of every stored month playlist with its rank movement."""

    playlists, _ = _repositories(storage)
    within = Scope.for_year(year) if year is not None else None
    chain = load_chain(playlists, ScopeKind.MONTH, within=within)
    if not len(chain):
        log.warning("No month playlists stored%s", f" for {year}" if year else "")
        return chain

    for index, playlist in enumerate(chain):
        log.info("%s (%s tracks)", playlist.title, len(playlist))
        deltas = chain.rank_deltas(index)
        for position, track in enumerate(playlist.tracks[:limit]):
            delta = deltas[position]
            movement = "new" if delta is None else f"{delta:+d}"
            log.info("%3d. %-6s %s", position + 1, movement, track)
    return chain


def export_playlists(
    scopes: Sequence[Scope] | None = None,
    *,
    top_n: int | None = EXPORT_TOP_N,
    public: bool = False,
    skip_existing: bool = True,
    storage: StorageConfig | None = None,
    exporter: PlaylistExporter | None = None,
) -> list[ExportResult]:
    """Publish stored playlists; without ``scopes`` every stored month is exported.

    A failed export does not stop the others. The failures are raised
    together once every playlist has been tried.
    """

    playlists, _ = _repositories(storage)
    selected = list(scopes) if scopes is not None else playlists.list_scopes(ScopeKind.MONTH)
    effective_exporter = exporter or SpotifyPlaylistExporter(
        config=get_spotify_export_config(storage=storage)
    )

    results: list[ExportResult] = []
    failed: list[str] = []
    for scope in selected:
        if not playlists.exists(scope):
            log.warning("No stored playlist for %s, run the matching update first", scope)
            continue
        try:
            playlist = playlists.load(scope)
            results.append(
                export_playlist(
                    playlist,
                    effective_exporter,
                    top_n=top_n,
                    public=public,
                    skip_existing=skip_existing,
                )
            )
        except (ExportError, PersistenceError):
            log.exception("Could not export %s", scope)
            failed.append(str(scope))

    if failed:
        raise ExportError(f"Export failed for: {', '.join(failed)}")
    return results
