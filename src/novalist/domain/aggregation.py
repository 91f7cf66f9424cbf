"""Fold period playlists into wider ones (months into a year, everything into all-time)."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.model import Playlist, Scope, ScopeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from novalist.domain.lookup_cache import LookupCache
    from novalist.domain.model import Track

log = getLogger(__name__)

YEARLY_TOP_N = 100


def ranking_key(track: Track) -> tuple[int, str]:
    """Highest count first, identity key as the tie-break."""
    return (-track.count, track.key)


def aggregate(
    playlists: Iterable[Playlist],
    scope: Scope,
    *,
    top_n: int | None = None,
    cache: LookupCache | None = None,
) -> Playlist:
    """Sum play counts by identity key across ``playlists``.

    Unlike ``Playlist.add_tracks`` every input track already carries a
    meaningful count, so counts are summed rather than occurrences.
    Accumulators are fresh copies; the inputs are left untouched.
    """

    accumulators: dict[str, Track] = {}
    sources = 0
    for playlist in playlists:
        sources += 1
        for track in playlist.tracks:
            accumulator = accumulators.get(track.key)
            if accumulator is None:
                accumulators[track.key] = track.copy()
                continue
            accumulator.count += track.count
            if accumulator.enrichment is None and track.enrichment is not None:
                accumulator.enrichment = track.enrichment.copy()

    result = Playlist(scope=scope, tracks=sorted(accumulators.values(), key=ranking_key))
    if top_n is not None:
        result.truncate(top_n)
    log.info(
        "Aggregated %s playlists into %s: %s distinct tracks, %s kept",
        sources,
        scope.title,
        len(accumulators),
        len(result),
    )
    if cache is not None:
        result.populate_enrichment(cache)
    return result


def select_for_scope(playlists: Iterable[Playlist], scope: Scope) -> list[Playlist]:
    """Keep the playlists lying inside ``scope``."""
    return [playlist for playlist in playlists if scope.contains(playlist.scope)]


def aggregate_year(
    months: Iterable[Playlist],
    year: int,
    *,
    top_n: int | None = YEARLY_TOP_N,
    cache: LookupCache | None = None,
) -> Playlist:
    scope = Scope.for_year(year)
    selected = [p for p in select_for_scope(months, scope) if p.scope.kind is ScopeKind.MONTH]
    return aggregate(selected, scope, top_n=top_n, cache=cache)


def aggregate_all_time(
    months: Iterable[Playlist],
    *,
    top_n: int | None = None,
    cache: LookupCache | None = None,
) -> Playlist:
    scope = Scope.all_time()
    selected = [p for p in months if p.scope.kind is ScopeKind.MONTH]
    return aggregate(selected, scope, top_n=top_n, cache=cache)
