from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Settings:
    """
    Central configuration for the draft room service.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties.
    """

    def __init__(self) -> None:
        # Storage
        self._store_backend = os.getenv("DRAFTROOM_STORE", "memory").lower()
        self._data_dir = Path(os.getenv("DRAFTROOM_DATA_DIR", "data/drafts"))

        # Catalog
        self._catalog_path = os.getenv("DRAFTROOM_CATALOG_PATH") or None

        # Draft defaults applied when a create request omits a value
        self._default_teams = _int_env("DRAFTROOM_DEFAULT_TEAMS", 12)
        self._default_rounds = _int_env("DRAFTROOM_DEFAULT_ROUNDS", 15)
        self._default_format = os.getenv("DRAFTROOM_DEFAULT_FORMAT", "standard").lower()
        self._default_sport = os.getenv("DRAFTROOM_DEFAULT_SPORT", "nfl").lower()
        self._default_year = _int_env("DRAFTROOM_DEFAULT_YEAR", 2025)

        self._debug = os.getenv("DRAFTROOM_DEBUG", "false").lower() in ("1", "true", "yes")

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @property
    def store_backend(self) -> str:
        if self._store_backend not in ("memory", "file"):
            raise RuntimeError(
                f"DRAFTROOM_STORE must be 'memory' or 'file', got {self._store_backend!r}"
            )
        return self._store_backend

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def catalog_path(self) -> Optional[Path]:
        return Path(self._catalog_path) if self._catalog_path else None

    # ------------------------------------------------------------------
    # Draft defaults
    # ------------------------------------------------------------------

    @property
    def default_teams(self) -> int:
        return self._default_teams

    @property
    def default_rounds(self) -> int:
        return self._default_rounds

    @property
    def default_format(self) -> str:
        return self._default_format

    @property
    def default_sport(self) -> str:
        return self._default_sport

    @property
    def default_year(self) -> int:
        return self._default_year

    @property
    def debug(self) -> bool:
        return self._debug


settings = Settings()
