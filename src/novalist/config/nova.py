"""Radio Nova scraper configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy, ShouldCacheHook
from .storage import StorageConfig, get_storage_config

NOVA_BASE_URL = "https://www.nova.fr"
NOVA_AJAX_PATH = "/wp-admin/admin-ajax.php"
NOVA_PLAYLIST_PATH = "/c-etait-quoi-ce-titre/"
NOVA_RADIO_ID = 910
NOVA_TIMEOUT_SECONDS = 30.0
NOVA_MAX_PAGES = 100

# pages are requested one at a time, about two seconds apart
NOVA_RATE_LIMIT = RateLimit(max_calls=1, per_seconds=2.0)
# waits grow 15s, 30s then stay capped at 30s before the day is given up
NOVA_RETRY_POLICY = RetryPolicy(total=4, backoff_factor=7.5, max_backoff_wait=30.0)

NOVA_HEADERS = {
    "Accept-Language": "fr-FR,fr;q=0.9",
    "Origin": NOVA_BASE_URL,
    "Referer": NOVA_BASE_URL + NOVA_PLAYLIST_PATH,
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36"
    ),
    "X-Requested-With": "XMLHttpRequest",
}


@dataclass(frozen=True, slots=True)
class NovaConfig:
    """Holds the scraper endpoints and HTTP behaviour."""

    resilience: ResilienceConfig
    ajax_path: str = NOVA_AJAX_PATH
    playlist_path: str = NOVA_PLAYLIST_PATH
    radio_id: int = NOVA_RADIO_ID
    max_pages: int = NOVA_MAX_PAGES
    day_end_time: str = "23:59"


def get_nova_config(
    *,
    storage: StorageConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> NovaConfig:
    storage_config = storage or get_storage_config()
    cache: CacheConfig | None = None
    if env_flag("NOVALIST_HTTP_CACHE", default=True):
        cache = CacheConfig.sqlite(storage_config.http_cache_path(), should_cache=cache_predicate)
    return NovaConfig(
        resilience=ResilienceConfig(
            name="nova",
            base_url=NOVA_BASE_URL,
            timeout_seconds=NOVA_TIMEOUT_SECONDS,
            retry=NOVA_RETRY_POLICY,
            ratelimit=NOVA_RATE_LIMIT,
            cache=cache,
            default_headers=NOVA_HEADERS,
        )
    )
