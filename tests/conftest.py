from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's data directory and credentials."""
    monkeypatch.setenv("NOVALIST_DATA_DIR", str(tmp_path / "novalist-data"))
    monkeypatch.setenv("NOVALIST_HTTP_CACHE", "0")
    monkeypatch.delenv("NOVALIST_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)
    monkeypatch.delenv("SPOTIFY_REDIRECT_URI", raising=False)
