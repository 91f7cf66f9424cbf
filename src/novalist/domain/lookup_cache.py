"""Memo of search results, persisted between runs.

Every distinct query string reaches the search service at most once for the
lifetime of a loaded cache. Entries are only ever added: a query that matched
nothing is remembered as an empty result set rather than retried.
"""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.errors import LookupNotFoundError, SearchError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from novalist.domain.model.matches import ArtistMatch, MatchSet, TrackMatch
    from novalist.domain.ports.persistence import LookupCacheRepository
    from novalist.domain.ports.search import SearchService

log = getLogger(__name__)

# Collaborations are stored as one "x and y" artist string while the search
# service indexes artists individually. Names that merely contain these
# tokens ("Him & Her", "Sandra") get split too; that is a known limitation.
ARTIST_CONJUNCTIONS: tuple[str, ...] = ("and", "&")


class LookupCache:
    """Single-threaded memo in front of a ``SearchService``."""

    def __init__(
        self,
        search: SearchService,
        entries: Mapping[str, MatchSet] | None = None,
    ) -> None:
        self._search = search
        self._matches: dict[str, MatchSet] = dict(entries or {})
        self.lookups = 0
        self.dirty = False

    @classmethod
    def restore(cls, search: SearchService, entries: Mapping[str, MatchSet]) -> LookupCache:
        """Rebuild a clean cache from a stored snapshot."""
        return cls(search, entries)

    def __len__(self) -> int:
        return len(self._matches)

    def __contains__(self, query: object) -> bool:
        return query in self._matches

    def snapshot(self) -> dict[str, MatchSet]:
        return dict(self._matches)

    def mark_saved(self) -> None:
        self.dirty = False

    def result_for(self, query: str) -> MatchSet:
        """Return the memoised result set, searching on a miss."""
        cached = self._matches.get(query)
        if cached is not None:
            return cached
        log.info("Searching for %s", query)
        result = self._search.search(query)
        self.lookups += 1
        self._matches.setdefault(query, result)
        self.dirty = True
        return self._matches[query]

    def track_info(self, query: str) -> TrackMatch:
        match = self.result_for(query).first_track()
        if match is None:
            raise LookupNotFoundError(query, "track")
        return match

    def artist_info(self, query: str) -> ArtistMatch:
        artist = self.result_for(query).first_usable_artist()
        if artist is not None:
            return artist

        lowered = query.lower()
        for conjunction in ARTIST_CONJUNCTIONS:
            if conjunction in lowered:
                return self._artist_info_for_list(lowered.split(conjunction), query)
        raise LookupNotFoundError(query, "artist")

    def _artist_info_for_list(self, names: list[str], query: str) -> ArtistMatch:
        for raw_name in names:
            name = raw_name.strip()
            if not name:
                continue
            try:
                return self.artist_info(name)
            except (LookupNotFoundError, SearchError) as exc:
                log.debug("No artist for segment %r of %r: %s", name, query, exc)
        raise LookupNotFoundError(query, "artist")


@contextmanager
def lookup_cache_session(
    repository: LookupCacheRepository,
    search: SearchService,
) -> Iterator[LookupCache]:
    """Load the cache snapshot and write it back on every exit path."""

    cache = LookupCache.restore(search, repository.load())
    log.info("Loaded lookup cache with %s entries", len(cache))
    try:
        yield cache
    finally:
        if cache.dirty:
            repository.save(cache.snapshot())
            cache.mark_saved()
            log.info(
                "Saved lookup cache with %s entries (%s new lookups)", len(cache), cache.lookups
            )
