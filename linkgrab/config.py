"""Centralised settings for linkgrab.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from linkgrab.scraper.urls import TRACKING_PARAMS

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/116.0"
)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_list(name: str) -> tuple[str, ...]:
    """Split a comma-separated env var into a tuple of non-empty items."""
    raw = os.environ.get(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LINKGRAB_TIMEOUT", "10.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("LINKGRAB_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # URL cleanup
    # ------------------------------------------------------------------
    cleanup_tracking: bool = field(
        default_factory=lambda: _env_bool("LINKGRAB_CLEANUP_TRACKING", True)
    )
    extra_tracking_params: tuple[str, ...] = field(
        default_factory=lambda: _env_list("LINKGRAB_EXTRA_TRACKING_PARAMS")
    )

    @property
    def tracking_params(self) -> frozenset[str]:
        """The built-in denylist extended with any configured extra keys."""
        return TRACKING_PARAMS | frozenset(self.extra_tracking_params)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LINKGRAB_LOG_LEVEL", "WARNING")
    )
    environment: str = field(
        default_factory=lambda: os.environ.get("LINKGRAB_ENV", "development")
    )


# Module-level singleton — import this everywhere:
#   from linkgrab.config import settings
settings = Settings()
