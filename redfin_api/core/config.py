"""
Configuration helpers for the Redfin member API.

Settings are read from environment variables once and cached; tests call
``get_settings.cache_clear()`` after changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    api_prefix: str
    cors_origins: tuple[str, ...]
    session_ttl_seconds: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _origins(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(o.strip().rstrip("/") for o in value.split(",") if o.strip())

    prefix = (os.getenv("API_PREFIX", "/api") or "").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        api_prefix=prefix,
        cors_origins=_origins(os.getenv("CORS_ORIGINS")),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "86400"), 86400),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
