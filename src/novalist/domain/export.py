"""Publish ranked playlists to an external playlist service."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from novalist.domain.model import ScopeKind

if TYPE_CHECKING:
    from novalist.domain.model import Playlist
    from novalist.domain.ports import PlaylistExporter, RemotePlaylist

log = getLogger(__name__)

EXPORT_TITLE_PREFIX = "Radio Nova - "
EXPORT_TOP_N = 100


@dataclass(slots=True)
class ExportResult:
    """What happened to one playlist during an export run."""

    name: str
    remote: RemotePlaylist | None = None
    added: int = 0
    already_exported: bool = False
    # identity keys of the exported slice that had no matched track id
    unmatched: list[str] = field(default_factory=list[str])


def export_title(playlist: Playlist, top_n: int | None = EXPORT_TOP_N) -> str:
    if playlist.scope.kind is ScopeKind.YEAR and top_n is not None:
        return f"{EXPORT_TITLE_PREFIX}Top {top_n} of {playlist.title}"
    return f"{EXPORT_TITLE_PREFIX}{playlist.title}"


def export_playlist(
    playlist: Playlist,
    exporter: PlaylistExporter,
    *,
    top_n: int | None = EXPORT_TOP_N,
    public: bool = False,
    skip_existing: bool = True,
) -> ExportResult:
    """Create a remote playlist holding the head of ``playlist``.

    Only the first ``top_n`` ranked tracks are considered. Tracks without a
    matched id are left out and reported; duplicate ids are added once. A
    remote playlist with the same name counts as a previous export and is
    left untouched unless ``skip_existing`` is off.
    """

    if top_n is not None and top_n < 1:
        raise ValueError("The export limit must be positive")

    name = export_title(playlist, top_n)
    result = ExportResult(name=name)

    if skip_existing:
        existing = exporter.find_playlist(name)
        if existing is not None:
            log.info("Skipping %s: already exported as %s", name, existing.url or existing.id)
            result.remote = existing
            result.already_exported = True
            return result

    head = playlist.tracks if top_n is None else playlist.tracks[:top_n]
    track_ids: list[str] = []
    seen: set[str] = set()
    for track in head:
        if track.enrichment is None or not track.enrichment.id:
            result.unmatched.append(track.key)
            continue
        if track.enrichment.id in seen:
            continue
        seen.add(track.enrichment.id)
        track_ids.append(track.enrichment.id)

    if not track_ids:
        log.warning("Not exporting %s: none of its %s tracks has a match", name, len(head))
        return result

    remote = exporter.create_playlist(
        name,
        description=f"Radio Nova playlist for {playlist.title}. Generated automatically.",
        public=public,
    )
    exporter.add_tracks(remote.id, track_ids)
    result.remote = remote
    result.added = len(track_ids)
    log.info(
        "Exported %s with %s tracks (%s without a match) to %s",
        name,
        result.added,
        len(result.unmatched),
        remote.url or remote.id,
    )
    return result


__all__ = ["EXPORT_TOP_N", "ExportResult", "export_playlist", "export_title"]
