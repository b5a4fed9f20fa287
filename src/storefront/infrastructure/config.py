"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'storefront.db'}"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    low_stock_threshold: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        raw_threshold = env.get("STOREFRONT_LOW_STOCK_THRESHOLD", "10")
        try:
            threshold = int(raw_threshold)
        except ValueError:
            raise ValueError(
                f"STOREFRONT_LOW_STOCK_THRESHOLD must be an integer, got {raw_threshold!r}"
            ) from None
        if threshold < 0:
            raise ValueError("STOREFRONT_LOW_STOCK_THRESHOLD cannot be negative")

        log_level = env.get("STOREFRONT_LOG_LEVEL", "INFO").upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"STOREFRONT_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")

        return cls(
            database_url=env.get("STOREFRONT_DATABASE_URL", DEFAULT_DATABASE_URL),
            low_stock_threshold=threshold,
            log_level=log_level,
        )
