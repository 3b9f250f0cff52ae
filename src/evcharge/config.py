"""Environment-based configuration."""

import os
from typing import Optional


def _get_env(name: str, default: Optional[str] = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _get_optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def supabase_url() -> str:
    return _get_env("EVCHARGE_SUPABASE_URL").rstrip("/")


def supabase_anon_key() -> str:
    return _get_env("EVCHARGE_SUPABASE_ANON_KEY")


def request_timeout() -> float:
    return float(_get_env("EVCHARGE_REQUEST_TIMEOUT", "10"))


def station_cache_ttl() -> Optional[float]:
    """Seconds before a cached station is refetched; None keeps it for the session."""
    value = _get_optional("EVCHARGE_STATION_CACHE_TTL")
    return float(value) if value is not None else None


def station_cache_max_entries() -> Optional[int]:
    value = _get_optional("EVCHARGE_STATION_CACHE_MAX_ENTRIES")
    return int(value) if value is not None else None
