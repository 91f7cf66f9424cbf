"""Persistence ports for playlists and the lookup cache snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from novalist.domain.model import MatchSet, Playlist, Scope, ScopeKind


class PlaylistRepository(Protocol):
    """Stores one playlist per scope. ``exists`` drives skip-if-exists fetching."""

    def exists(self, scope: Scope) -> bool: ...

    def load(self, scope: Scope) -> Playlist: ...

    def save(self, playlist: Playlist) -> None: ...

    def list_scopes(self, kind: ScopeKind) -> Iterable[Scope]: ...


class LookupCacheRepository(Protocol):
    """Loads and stores the search memo as a single snapshot."""

    def load(self) -> Mapping[str, MatchSet]: ...

    def save(self, entries: Mapping[str, MatchSet]) -> None: ...


__all__ = ["LookupCacheRepository", "PlaylistRepository"]
