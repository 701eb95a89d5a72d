"""Runtime settings read from the environment and an optional `.env` file."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from chunking.boundary import MAX_CHUNK_LENGTH, validate_max_len

LOGGER = logging.getLogger(__name__)

_ENV_FILE = Path(".env")

ENV_MAX_CHUNK_LENGTH = "TEXTSPLIT_MAX_CHUNK_LENGTH"
ENV_EXPORT_PATH = "TEXTSPLIT_EXPORT_PATH"
ENV_SHEET_NAME = "TEXTSPLIT_SHEET_NAME"
ENV_LOG_LEVEL = "TEXTSPLIT_LOG_LEVEL"

DEFAULT_EXPORT_PATH = "split-text.xlsx"
DEFAULT_SHEET_NAME = "Split text"
MAX_SHEET_NAME_LENGTH = 31  # Excel limit
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    max_chunk_length: int = MAX_CHUNK_LENGTH
    export_path: str = DEFAULT_EXPORT_PATH
    sheet_name: str = DEFAULT_SHEET_NAME
    log_level: str = "INFO"

    def override(self, **values) -> "Settings":
        """Return a copy with the non-None `values` applied."""
        changes = {key: value for key, value in values.items() if value is not None}
        if "max_chunk_length" in changes:
            validate_max_len(changes["max_chunk_length"])
        if "sheet_name" in changes:
            changes["sheet_name"] = changes["sheet_name"][:MAX_SHEET_NAME_LENGTH]
        return replace(self, **changes)


def _parse_max_length(raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_MAX_CHUNK_LENGTH} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{ENV_MAX_CHUNK_LENGTH} must be positive, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from `env` (defaults to `os.environ` after loading `.env`).

    Raises ValueError when the chunk length or log level is malformed.
    """
    if env is None:
        if _ENV_FILE.exists():
            load_dotenv(_ENV_FILE)
        env = os.environ

    max_length = MAX_CHUNK_LENGTH
    raw_length = env.get(ENV_MAX_CHUNK_LENGTH)
    if raw_length:
        max_length = _parse_max_length(raw_length)

    sheet_name = (env.get(ENV_SHEET_NAME) or DEFAULT_SHEET_NAME)[:MAX_SHEET_NAME_LENGTH]

    log_level = (env.get(ENV_LOG_LEVEL) or "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"{ENV_LOG_LEVEL} must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    settings = Settings(
        max_chunk_length=max_length,
        export_path=env.get(ENV_EXPORT_PATH) or DEFAULT_EXPORT_PATH,
        sheet_name=sheet_name,
        log_level=log_level,
    )
    LOGGER.debug("Loaded settings: %s", settings)
    return settings
