"""Port for the music search service used to enrich tracks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from novalist.domain.model.matches import MatchSet


@runtime_checkable
class SearchService(Protocol):
    """Free-text search returning both track and artist matches.

    Implementations raise ``SearchError`` when the service cannot answer; an
    empty ``MatchSet`` means the query was understood but nothing matched.
    """

    def search(self, query: str) -> MatchSet: ...


__all__ = ["SearchService"]
