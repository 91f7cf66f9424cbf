"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .nova import NovaConfig, get_nova_config
from .spotify import (
    SpotifyConfig,
    SpotifyExportConfig,
    get_spotify_config,
    get_spotify_export_config,
)
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "NovaConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SpotifyConfig",
    "SpotifyExportConfig",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_nova_config",
    "get_spotify_config",
    "get_spotify_export_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
