"""File based repositories for playlist snapshots and the lookup cache."""

from __future__ import annotations

import gzip
import os
import re
import zlib
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from novalist.domain.errors import PersistenceError
from novalist.domain.model import Scope, ScopeKind, month_from_name
from novalist.domain.ports import LookupCacheRepository, PlaylistRepository

from .mappings import (
    lookup_cache_from_snapshot,
    lookup_cache_to_snapshot,
    playlist_from_snapshot,
    playlist_to_snapshot,
)
from .schema import LookupCacheSnapshot, PlaylistSnapshot

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from novalist.domain.model import MatchSet, Playlist

log = getLogger(__name__)

SNAPSHOT_SUFFIX: Final[str] = ".json"

_DAY_FILE = re.compile(r"^playlist-(\d{4})-(\d{2})-(\d{2})\.json$")
_MONTH_FILE = re.compile(r"^playlist-([A-Z][a-z]+)-(\d{4})\.json$")
_YEAR_FILE = re.compile(r"^playlist-(\d{4})\.json$")
_ALL_TIME_FILE = "playlist-all.json"
_NAMED_FILE = re.compile(r"^playlist-(.+)\.json$")


def _write_atomically(path: Path, payload: bytes) -> None:
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(payload)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise PersistenceError(f"Could not write {path}: {exc}") from exc


def _scope_from_root_file(name: str) -> Scope | None:
    if name == _ALL_TIME_FILE:
        return Scope.all_time()
    if match := _YEAR_FILE.match(name):
        return Scope.for_year(int(match.group(1)))
    if match := _MONTH_FILE.match(name):
        try:
            return Scope.for_month(int(match.group(2)), month_from_name(match.group(1)))
        except ValueError:
            pass
    if (match := _NAMED_FILE.match(name)) and not _DAY_FILE.match(name):
        return Scope.named(match.group(1))
    return None


class JsonPlaylistRepository:
    """Stores each playlist as ``playlist-<slug>.json``.

    Day playlists live under ``<year>/<MM>/``; every other scope sits at the
    root of the directory.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, scope: Scope) -> Path:
        filename = f"{scope.file_stem}{SNAPSHOT_SUFFIX}"
        if scope.kind is ScopeKind.DAY:
            return self.root / f"{scope.year:04d}" / f"{scope.month:02d}" / filename
        return self.root / filename

    def exists(self, scope: Scope) -> bool:
        return self.path_for(scope).is_file()

    def load(self, scope: Scope) -> Playlist:
        path = self.path_for(scope)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Could not read {path}: {exc}") from exc
        try:
            playlist = playlist_from_snapshot(PlaylistSnapshot.model_validate_json(raw))
        except ValueError as exc:
            # pydantic validation errors and impossible scopes alike
            raise PersistenceError(f"Could not decode {path}: {exc}") from exc

        if playlist.scope != scope:
            raise PersistenceError(
                f"{path} holds the playlist for {playlist.scope}, expected {scope}"
            )
        return playlist

    def save(self, playlist: Playlist) -> None:
        path = self.path_for(playlist.scope)
        payload = playlist_to_snapshot(playlist).model_dump_json(indent=2)
        _write_atomically(path, payload.encode("utf-8"))
        log.debug("Saved %s tracks to %s", len(playlist), path)

    def list_scopes(self, kind: ScopeKind) -> list[Scope]:
        if not self.root.is_dir():
            return []
        scopes = (
            self._day_scopes()
            if kind is ScopeKind.DAY
            else [
                scope
                for path in self.root.glob(f"playlist-*{SNAPSHOT_SUFFIX}")
                if (scope := _scope_from_root_file(path.name)) is not None
                and scope.kind is kind
            ]
        )
        return sorted(scopes, key=lambda scope: (scope.start or scope.slug, scope.slug))

    def _day_scopes(self) -> list[Scope]:
        scopes: list[Scope] = []
        for path in self.root.glob(f"*/*/playlist-*{SNAPSHOT_SUFFIX}"):
            match = _DAY_FILE.match(path.name)
            if match is None:
                continue
            year, month, day = (int(part) for part in match.groups())
            try:
                scopes.append(Scope(ScopeKind.DAY, year=year, month=month, day=day))
            except ValueError:
                log.warning("Ignoring day snapshot with an impossible date: %s", path)
        return scopes


class GzipLookupCacheRepository:
    """Stores the lookup memo as one gzip compressed JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, MatchSet]:
        if not self.path.exists():
            log.info("No lookup cache at %s yet, starting empty", self.path)
            return {}
        try:
            with gzip.open(self.path, "rb") as handle:
                raw = handle.read()
        except (OSError, EOFError, zlib.error) as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc
        try:
            snapshot = LookupCacheSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(f"Could not decode {self.path}: {exc}") from exc

        entries = lookup_cache_from_snapshot(snapshot)
        log.debug("Loaded %s lookup cache entries from %s", len(entries), self.path)
        return entries

    def save(self, entries: Mapping[str, MatchSet]) -> None:
        payload = lookup_cache_to_snapshot(entries).model_dump_json()
        _write_atomically(self.path, gzip.compress(payload.encode("utf-8")))
        log.debug("Saved %s lookup cache entries to %s", len(entries), self.path)


if TYPE_CHECKING:
    _playlist_repository_check: PlaylistRepository = JsonPlaylistRepository(Path())
    _lookup_repository_check: LookupCacheRepository = GzipLookupCacheRepository(Path())
