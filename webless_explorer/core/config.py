"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    worker_port: int = 9000
    detail_workers: int = 10
    cache_ttl_seconds: int = 0
    cache_max_entries: int = 128
    request_timeout: float = 10.0


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using default %d", name, raw, default)
        return default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_MAPS_API_KEY") or os.getenv("GOOGLE_API_KEY", "")
    worker_port = _int_env("WORKER_PORT", 9000)
    detail_workers = max(1, _int_env("WEBLESS_DETAIL_WORKERS", 10))
    cache_ttl_seconds = max(0, _int_env("WEBLESS_CACHE_TTL_SECONDS", 0))
    cache_max_entries = max(1, _int_env("WEBLESS_CACHE_MAX_ENTRIES", 128))
    request_timeout = float(os.getenv("WEBLESS_REQUEST_TIMEOUT", "10") or 10)

    if not google_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not configured; Google Places requests will fail.")
    if not cache_ttl_seconds:
        logger.info("WEBLESS_CACHE_TTL_SECONDS is 0; search results will not be cached.")

    return Settings(
        google_api_key=google_api_key,
        worker_port=worker_port,
        detail_workers=detail_workers,
        cache_ttl_seconds=cache_ttl_seconds,
        cache_max_entries=cache_max_entries,
        request_timeout=request_timeout,
    )
