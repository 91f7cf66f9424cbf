"""Chronological chaining of period playlists and rank deltas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from novalist.domain.model import Playlist, Track

NOT_RANKED: Final[int] = -1


def _chronological_key(playlist: Playlist) -> date:
    start = playlist.scope.start
    if start is None:
        raise ValueError(f"{playlist.title} has no position in time and cannot be chained")
    return start


@dataclass(slots=True)
class PlaylistChain:
    """Owns an ordered list of playlists; neighbours are addressed by index."""

    playlists: list[Playlist] = field(default_factory=list["Playlist"])

    @classmethod
    def link(cls, playlists: Iterable[Playlist]) -> PlaylistChain:
        """Order playlists by the start of their scope, oldest first."""
        ordered = sorted(playlists, key=_chronological_key)
        for earlier, later in zip(ordered, ordered[1:], strict=False):
            if _chronological_key(earlier) == _chronological_key(later):
                raise ValueError(f"Cannot chain two playlists for {later.title}")
        return cls(playlists=ordered)

    def __len__(self) -> int:
        return len(self.playlists)

    def __iter__(self) -> Iterator[Playlist]:
        return iter(self.playlists)

    def __getitem__(self, index: int) -> Playlist:
        return self.playlists[index]

    def index_of(self, playlist: Playlist) -> int:
        for index, candidate in enumerate(self.playlists):
            if candidate is playlist:
                return index
        raise ValueError(f"{playlist.title} is not part of this chain")

    def previous(self, index: int) -> Playlist | None:
        self._check(index)
        return self.playlists[index - 1] if index > 0 else None

    def next(self, index: int) -> Playlist | None:
        self._check(index)
        return self.playlists[index + 1] if index + 1 < len(self.playlists) else None

    def previous_rank(self, index: int, track: Track) -> int:
        """Position of ``track`` in the preceding playlist, or ``NOT_RANKED``."""
        previous = self.previous(index)
        if previous is None:
            return NOT_RANKED
        position = previous.index_of(track.key)
        return NOT_RANKED if position is None else position

    def rank_delta(self, index: int, position: int, track: Track) -> int | None:
        """Positive when the track climbed, negative when it fell.

        ``None`` means the track was not ranked in the previous playlist and no
        delta should be displayed; it is not a tie.
        """
        previous_position = self.previous_rank(index, track)
        if previous_position == NOT_RANKED:
            return None
        return previous_position - position

    def rank_deltas(self, index: int) -> list[int | None]:
        playlist = self.playlists[index]
        return [
            self.rank_delta(index, position, track)
            for position, track in enumerate(playlist.tracks)
        ]

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.playlists):
            raise IndexError(f"Chain index out of range: {index}")
