"""Playlist aggregate: the tracks heard during one scope, with play counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.model.enums import ScopeKind
from novalist.domain.model.track import Track

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from novalist.domain.lookup_cache import LookupCache
    from novalist.domain.model.scope import Scope

log = getLogger(__name__)


@dataclass(eq=False)
class Playlist:
    """Ordered tracks for a scope.

    Identity keys are unique inside a playlist, which ``add_tracks`` maintains
    with a linear scan. Day playlists are the exception: they keep every raw
    occurrence in air order and are only folded once they are added to a
    month.
    """

    scope: Scope
    tracks: list[Track] = field(default_factory=list["Track"])

    @property
    def title(self) -> str:
        return self.scope.title

    @property
    def slug(self) -> str:
        return self.scope.slug

    @property
    def is_raw(self) -> bool:
        return self.scope.kind is ScopeKind.DAY

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.tracks)

    def add_tracks(self, tracks: Iterable[Track]) -> None:
        """Merge raw occurrences, each counting as a single play."""
        for incoming in tracks:
            existing = self.find(incoming.key)
            if existing is not None:
                existing.count += 1
                continue
            incoming.count = 1
            self.tracks.append(incoming)

    def find(self, key: str) -> Track | None:
        for track in self.tracks:
            if track.key == key:
                return track
        return None

    def index_of(self, key: str) -> int | None:
        for index, track in enumerate(self.tracks):
            if track.key == key:
                return index
        return None

    def sort(self) -> None:
        self.tracks.sort(key=lambda track: track.count, reverse=True)

    def truncate(self, limit: int) -> None:
        if limit < 0:
            raise ValueError("Playlist limit must be non-negative")
        del self.tracks[limit:]

    def populate_enrichment(self, cache: LookupCache) -> int:
        """Look up every track that has no enrichment yet.

        Individual failures are logged by the track and skipped. Returns the
        number of tracks that gained a match during this pass.
        """
        missing = [track for track in self.tracks if track.enrichment is None]
        if not missing:
            return 0
        log.info("Enriching %s of %s tracks in %s", len(missing), len(self.tracks), self.title)
        enriched = 0
        for track in missing:
            if track.populate_enrichment(cache):
                enriched += 1
        return enriched

    def total_plays(self) -> int:
        return sum(track.count for track in self.tracks)

    def __str__(self) -> str:
        lines = [f"Playlist: {self.title}"]
        for position, track in enumerate(self.tracks, start=1):
            lines.append(f"({position}) {track}")
        return "\n".join(lines)
