from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from novalist.config import (
    ConfigurationError,
    MissingConfigurationError,
    StorageConfig,
    env_flag,
    get_spotify_config,
    get_spotify_export_config,
    require_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.delenv("MISSING_B", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), ("off", False), ("false", False), ("", True)],
)
def test_env_flag(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG", default=True) is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError, match="EXAMPLE_FLAG"):
        env_flag("EXAMPLE_FLAG", default=False)


def test_get_spotify_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")

    config = get_spotify_config()

    assert (config.client_id, config.client_secret) == ("id", "secret")
    assert config.market == "FR"


def test_get_spotify_export_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "secret")
    monkeypatch.setenv("SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8080/callback")

    config = get_spotify_export_config(storage=StorageConfig(data_dir=tmp_path))

    assert config.redirect_uri == "http://127.0.0.1:8080/callback"
    assert "playlist-modify-private" in config.scope
    assert config.token_cache_path == tmp_path.resolve() / "spotify-token.json"
