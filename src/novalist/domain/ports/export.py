"""Port for the service ranked playlists are published to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class RemotePlaylist:
    id: str
    name: str
    url: str | None = None


@runtime_checkable
class PlaylistExporter(Protocol):
    """Creates playlists in the user's account and fills them with track ids.

    Implementations raise ``ExportError`` when the service fails a call.
    """

    def find_playlist(self, name: str) -> RemotePlaylist | None: ...

    def create_playlist(self, name: str, *, description: str, public: bool) -> RemotePlaylist: ...

    def add_tracks(self, playlist_id: str, track_ids: Sequence[str]) -> None: ...


__all__ = ["PlaylistExporter", "RemotePlaylist"]
