"""Ports for fetching raw playlist pages from the radio's website."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True)
class RawTrack:
    """One on-air occurrence exactly as the page shows it."""

    artist: str
    title: str
    time: str = ""
    image_url: str = ""
    store_url: str = ""


@dataclass(slots=True)
class RawTrackPage:
    """One page of a day's playlist."""

    tracks: list[RawTrack] = field(default_factory=list["RawTrack"])
    has_more: bool = False


@runtime_checkable
class DayPlaylistFetcher(Protocol):
    """Callable port returning every raw occurrence played on one day."""

    def fetch_page(self, day: date, page: int) -> RawTrackPage: ...

    def __call__(self, day: date) -> list[RawTrack]: ...


__all__ = ["DayPlaylistFetcher", "RawTrack", "RawTrackPage"]
