"""Runtime configuration read from the environment, plus logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from bstutor.session.state import Settings

# Where settings.json and history.json live. Set to an empty string to keep
# everything in memory.
DATA_DIR = os.environ.get("BSTUTOR_DATA_DIR", str(Path.home() / ".bstutor"))
LOG_LEVEL = os.environ.get("BSTUTOR_LOG_LEVEL", "INFO").upper()
DEFAULT_TOTAL_HANDS = int(os.environ.get("BSTUTOR_TOTAL_HANDS", "20"))
DEFAULT_DECK_COUNT = 6

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=level or LOG_LEVEL)


def data_dir() -> Path | None:
    """Storage directory, or None when persistence is disabled."""
    return Path(DATA_DIR).expanduser() if DATA_DIR else None


def default_settings() -> Settings:
    """Settings used when nothing has been saved yet."""
    return Settings(total_hands=DEFAULT_TOTAL_HANDS, deck_count=DEFAULT_DECK_COUNT)
