"""
Folio configuration. All environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


def _float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class Settings:
    """Console settings from environment variables."""

    # Remote API
    API_URL: str = os.environ.get("FOLIO_API_URL", "http://localhost:8080").rstrip("/")
    API_TOKEN: str = os.environ.get("FOLIO_API_TOKEN", "")

    # Timeouts (seconds): transport timeout per HTTP request, and the bound the
    # reconciler puts on each write before treating it as failed.
    REQUEST_TIMEOUT: float = _float("FOLIO_REQUEST_TIMEOUT", 30.0)
    WRITE_TIMEOUT: float = _float("FOLIO_WRITE_TIMEOUT", 10.0)

    # Project list paging
    PAGE_SIZE: int = _int("FOLIO_PAGE_SIZE", 10)

    # Logging
    LOG_LEVEL: str = os.environ.get("FOLIO_LOG_LEVEL", "WARNING").upper()


# Singleton instance
settings = Settings()
