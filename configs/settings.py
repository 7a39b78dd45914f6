from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Central configuration for the garden tracker.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Persistence location
        self._data_dir = Path(os.getenv("GARDEN_DATA_DIR", "runtime/data"))
        self._persist = _env_flag("GARDEN_PERSIST", True)

        # Storage slot names, one per store
        self._plants_storage_key = os.getenv(
            "GARDEN_PLANTS_STORAGE_KEY", "garden-plants-storage"
        )
        self._activities_storage_key = os.getenv(
            "GARDEN_ACTIVITIES_STORAGE_KEY", "garden-activities-storage"
        )
        self._settings_storage_key = os.getenv(
            "GARDEN_SETTINGS_STORAGE_KEY", "garden-settings-storage"
        )

        self._seed_defaults = _env_flag("GARDEN_SEED_DEFAULTS", True)
        self._log_level = os.getenv("GARDEN_LOG_LEVEL", "INFO").upper()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Optional[Path]:
        """Directory for persisted stores, or None when persistence is off."""
        if not self._persist:
            return None
        return self._data_dir

    @property
    def plants_storage_key(self) -> str:
        return self._plants_storage_key

    @property
    def activities_storage_key(self) -> str:
        return self._activities_storage_key

    @property
    def settings_storage_key(self) -> str:
        return self._settings_storage_key

    @property
    def seed_defaults(self) -> bool:
        return self._seed_defaults

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @property
    def log_level(self) -> str:
        return self._log_level


settings = Settings()
