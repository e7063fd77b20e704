"""
Persistence of settings and hand history.

Storage is best-effort: every adapter method is async and never raises.
Failures are logged and loads fall back to ``None`` (settings) or ``[]``
(history), so a broken disk never interrupts a practice session.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol

from .state import HandResult, Settings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
HISTORY_FILE = "history.json"

# Anything a hand-edited or truncated file can raise while being decoded.
_LOAD_ERRORS = (
    OSError,
    TypeError,
    ValueError,
    KeyError,
    AttributeError,
    OverflowError,
    RecursionError,
)


class StorageAdapter(Protocol):
    async def save_settings(self, settings: Settings) -> None: ...

    async def load_settings(self) -> Settings | None: ...

    async def save_history(self, history: list[HandResult]) -> None: ...

    async def load_history(self) -> list[HandResult]: ...

    async def clear_history(self) -> None: ...


class JsonFileStorage:
    """Stores ``settings.json`` and ``history.json`` under *base_dir*."""

    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir = Path(base_dir)
        self.settings_path = self.base_dir / SETTINGS_FILE
        self.history_path = self.base_dir / HISTORY_FILE
        self._lock = threading.Lock()

    # ── blocking helpers (run in a worker thread) ────────────────────────────

    def _write_json(self, path: Path, payload: Any) -> None:
        with self._lock:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            tmp.replace(path)

    def _read_json(self, path: Path) -> Any:
        with self._lock:
            if not path.exists():
                return None
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)

    def _remove(self, path: Path) -> None:
        with self._lock:
            path.unlink(missing_ok=True)

    # ── adapter API ──────────────────────────────────────────────────────────

    async def save_settings(self, settings: Settings) -> None:
        try:
            await asyncio.to_thread(self._write_json, self.settings_path, settings.to_dict())
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save settings to %s", self.settings_path)

    async def load_settings(self) -> Settings | None:
        try:
            data = await asyncio.to_thread(self._read_json, self.settings_path)
            if data is None:
                return None
            return Settings.from_dict(data)
        except _LOAD_ERRORS:
            logger.exception("Failed to load settings from %s", self.settings_path)
            return None

    async def save_history(self, history: list[HandResult]) -> None:
        try:
            payload = [h.to_dict() for h in history]
            await asyncio.to_thread(self._write_json, self.history_path, payload)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save history to %s", self.history_path)

    async def load_history(self) -> list[HandResult]:
        try:
            data = await asyncio.to_thread(self._read_json, self.history_path)
            if data is None:
                return []
            return [HandResult.from_dict(item) for item in data]
        except _LOAD_ERRORS:
            logger.exception("Failed to load history from %s", self.history_path)
            return []

    async def clear_history(self) -> None:
        try:
            await asyncio.to_thread(self._remove, self.history_path)
        except OSError:
            logger.exception("Failed to clear history at %s", self.history_path)


class InMemoryStorage:
    """Dict-backed adapter used when no data directory is configured."""

    def __init__(self) -> None:
        self._settings: dict[str, Any] | None = None
        self._history: list[dict[str, Any]] = []

    async def save_settings(self, settings: Settings) -> None:
        self._settings = settings.to_dict()

    async def load_settings(self) -> Settings | None:
        if self._settings is None:
            return None
        return Settings.from_dict(self._settings)

    async def save_history(self, history: list[HandResult]) -> None:
        self._history = [h.to_dict() for h in history]

    async def load_history(self) -> list[HandResult]:
        return [HandResult.from_dict(item) for item in self._history]

    async def clear_history(self) -> None:
        self._history = []


def open_storage(base_dir: Path | None) -> StorageAdapter:
    """File storage under *base_dir*, or in-memory storage when it is None."""
    if base_dir is None:
        logger.info("No data directory configured; history will not persist")
        return InMemoryStorage()
    return JsonFileStorage(base_dir)
