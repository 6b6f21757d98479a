"""Runtime settings, read from ``STOCKROOM_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from stockroom.domain.exceptions import ValidationError

# Project root when installed in editable mode.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

STORES = ("json", "mongo")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    store: str = "json"
    data_dir: Path = DEFAULT_DATA_DIR
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = "stockroom"
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        if self.store not in STORES:
            raise ValidationError(
                f"Unknown store {self.store!r} (expected one of {', '.join(STORES)})"
            )
        if self.log_level not in LOG_LEVELS:
            raise ValidationError(f"Unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            store=env.get("STOCKROOM_STORE", defaults.store).strip().lower(),
            data_dir=Path(env["STOCKROOM_DATA_DIR"]) if env.get("STOCKROOM_DATA_DIR") else defaults.data_dir,
            mongo_uri=env.get("STOCKROOM_MONGO_URI", defaults.mongo_uri),
            mongo_database=env.get("STOCKROOM_MONGO_DATABASE", defaults.mongo_database),
            log_level=env.get("STOCKROOM_LOG_LEVEL", defaults.log_level).strip().upper(),
            log_json=env.get("STOCKROOM_LOG_JSON", "").strip().lower() in ("1", "true", "yes"),
        )
