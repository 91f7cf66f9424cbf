"""Track entity: one song as heard on air, with its play count."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.errors import LookupNotFoundError, SearchError
from novalist.domain.normalization import (
    clean_title,
    normalize_artist,
    normalize_title,
    parse_time_of_day,
)

if TYPE_CHECKING:
    from novalist.domain.lookup_cache import LookupCache
    from novalist.domain.model.matches import TrackMatch
    from novalist.domain.ports.fetching import RawTrack

log = getLogger(__name__)

KEY_SEPARATOR = "|"
UNRESOLVED_ARTIST_URL = "#"


@dataclass(eq=False, kw_only=True)
class Track:
    """A song identified by its normalised artist and title.

    Artist and title are normalised once when the track is built from a
    scraped record; merging compares the stored strings as they are.
    """

    artist: str
    title: str
    image_url: str = ""
    store_url: str = ""
    count: int = 1
    hour: int | None = None
    minute: int | None = None
    enrichment: TrackMatch | None = None

    @classmethod
    def from_raw(cls, raw: RawTrack) -> Track:
        hour: int | None = None
        minute: int | None = None
        if raw.time:
            try:
                hour, minute = parse_time_of_day(raw.time)
            except ValueError:
                log.debug("Ignoring unparsable air time %r for %s", raw.time, raw.title)
        return cls(
            artist=normalize_artist(raw.artist),
            title=normalize_title(raw.title),
            image_url=raw.image_url.strip(),
            store_url=raw.store_url.strip(),
            hour=hour,
            minute=minute,
        )

    @property
    def key(self) -> str:
        return self.artist + KEY_SEPARATOR + self.title

    @property
    def search_query(self) -> str:
        return f"{self.title} by {self.artist}"

    @property
    def is_enriched(self) -> bool:
        return self.enrichment is not None

    def populate_enrichment(self, cache: LookupCache) -> bool:
        """Fill the enrichment slot from the lookup cache if it is empty.

        Returns True when a match was attached by this call. Failures leave the
        slot empty so that a later run can try again.
        """
        if self.enrichment is not None:
            return False
        try:
            match = cache.track_info(self.search_query)
        except LookupNotFoundError:
            log.info("No match for %s by %s", self.title, self.artist)
            return False
        except SearchError as exc:
            log.warning("Search failed for %s by %s: %s", self.title, self.artist, exc)
            return False

        expected = clean_title(self.title)
        found = clean_title(match.title)
        if expected != found:
            log.warning(
                "Possible bad match for %s by %s: %r != %r", self.title, self.artist, expected, found
            )
        self.enrichment = match
        return True

    def copy(self) -> Track:
        """Independent copy carrying the identity, links, count and enrichment."""
        return Track(
            artist=self.artist,
            title=self.title,
            image_url=self.image_url,
            store_url=self.store_url,
            count=self.count,
            enrichment=self.enrichment.copy() if self.enrichment is not None else None,
        )

    @property
    def thumb_url(self) -> str:
        if self.enrichment is not None and self.enrichment.thumbnails:
            return self.enrichment.thumbnails[-1].url
        return self.image_url

    @property
    def match_url(self) -> str:
        if self.enrichment is not None and self.enrichment.url:
            return self.enrichment.url
        return ""

    @property
    def duration_label(self) -> str:
        if self.enrichment is None or self.enrichment.duration_seconds is None:
            return ""
        minutes, seconds = divmod(self.enrichment.duration_seconds, 60)
        hours, minutes = divmod(minutes, 60)
        if hours:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    def primary_artist_url(self, cache: LookupCache | None = None) -> str:
        if self.enrichment is None:
            return UNRESOLVED_ARTIST_URL
        for artist in self.enrichment.artists:
            if artist.id and artist.url:
                return artist.url
        if cache is None:
            return UNRESOLVED_ARTIST_URL
        try:
            info = cache.artist_info(self.artist)
        except (LookupNotFoundError, SearchError):
            return UNRESOLVED_ARTIST_URL
        log.debug("Resolved artist %s through search: %s", self.artist, info.name)
        return info.url or UNRESOLVED_ARTIST_URL

    def __str__(self) -> str:
        return f"{self.title} by {self.artist} [{self.count}]"
