"""
Configuration management for the Folio console.

Multi-environment support:
  The console keeps a separate token per API URL, so a local API and a
  deployed one can both stay configured.

  Config structure:
  {
    "environments": {
      "https://admin.example.com": {
        "token": "...",
        "default_project_id": "..."
      },
      "http://localhost:8080": {
        "token": "...",
        "default_project_id": null
      }
    },
    "default_url": "http://localhost:8080"
  }

Environment resolution order:
  1. FOLIO_API_URL environment variable
  2. --api-url command line flag
  3. default_url from config file
  4. Fallback: http://localhost:8080
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080"


class Config:
    """Config manager for the console with multi-environment support."""

    def __init__(self, api_url_override: str | None = None, config_dir: Path | None = None):
        """
        Initialize config.

        Args:
            api_url_override: Optional --api-url flag value
            config_dir: Where config.json lives (default ~/.folio)
        """
        self.config_dir = config_dir or Path.home() / ".folio"
        self.config_file = self.config_dir / "config.json"
        self._data: dict = {}
        self._api_url_override = api_url_override
        self._load()

    def _load(self):
        """Load config from disk. An unreadable file counts as empty."""
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    self._data = json.load(f)
            except (OSError, ValueError):
                logger.warning("config: ignoring unreadable %s", self.config_file)
                self._data = {}

        if not isinstance(self._data.get("environments"), dict):
            self._data["environments"] = {}

    def _save(self):
        """Save config to disk, readable by the owner only."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._data, f, indent=2)
        self.config_file.chmod(0o600)

    @property
    def api_url(self) -> str:
        env_url = os.environ.get("FOLIO_API_URL")
        if env_url:
            return env_url.rstrip("/")
        if self._api_url_override:
            return self._api_url_override.rstrip("/")
        return self.default_url.rstrip("/")

    @property
    def default_url(self) -> str:
        return self._data.get("default_url") or DEFAULT_API_URL

    @default_url.setter
    def default_url(self, value: str):
        self._data["default_url"] = value.rstrip("/")
        self._save()

    def _get_env(self) -> dict:
        return self._data["environments"].get(self.api_url, {})

    def _set_env(self, key: str, value):
        self._data["environments"].setdefault(self.api_url, {})[key] = value
        self._save()

    @property
    def token(self) -> str | None:
        """API token for the current environment."""
        return self._get_env().get("token")

    @token.setter
    def token(self, value: str):
        self._set_env("token", value)

    @property
    def default_project_id(self) -> str | None:
        """Project the outline opens on at startup."""
        return self._get_env().get("default_project_id")

    @default_project_id.setter
    def default_project_id(self, value: str | None):
        self._set_env("default_project_id", value)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear_environment(self, url: str | None = None):
        """
        Forget the token and settings of one environment.

        Args:
            url: Environment URL to clear. If None, clears current environment.
        """
        target_url = (url or self.api_url).rstrip("/")
        if target_url in self._data["environments"]:
            del self._data["environments"][target_url]
            self._save()

    def clear_all(self):
        """Forget every environment and delete the config file."""
        self._data = {"environments": {}}
        if self.config_file.exists():
            self.config_file.unlink()
