from __future__ import annotations

import pytest

from novalist.domain.model import Playlist, Scope, Track
from novalist.domain.ranking import NOT_RANKED, PlaylistChain


def _month(month: int, *titles: str) -> Playlist:
    return Playlist(
        scope=Scope.for_month(2024, month),
        tracks=[Track(artist="a", title=title) for title in titles],
    )


def test_link_orders_chronologically() -> None:
    march, january, february = _month(3), _month(1), _month(2)

    chain = PlaylistChain.link([march, january, february])

    assert list(chain) == [january, february, march]
    assert chain.previous(0) is None
    assert chain.next(0) is february
    assert chain.previous(2) is february
    assert chain.next(2) is None
    assert chain.index_of(march) == 2


def test_rank_deltas() -> None:
    chain = PlaylistChain.link([_month(1, "a", "b", "c"), _month(2, "b", "a", "c", "d")])
    february = chain[1]

    assert chain.rank_deltas(1) == [1, -1, 0, None]
    assert chain.previous_rank(1, february.tracks[3]) == NOT_RANKED
    assert chain.rank_deltas(0) == [None, None, None]


def test_link_rejects_unbounded_and_duplicate_scopes() -> None:
    with pytest.raises(ValueError, match="cannot be chained"):
        PlaylistChain.link([Playlist(scope=Scope.all_time())])
    with pytest.raises(ValueError, match="Cannot chain two playlists"):
        PlaylistChain.link([_month(1), _month(1)])


def test_out_of_range_index() -> None:
    chain = PlaylistChain.link([_month(1)])

    with pytest.raises(IndexError):
        chain.previous(1)
