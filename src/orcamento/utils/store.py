"""Local key-value store for the quote state.

Each key lives in its own JSON file under the data directory. Persistence is
best effort: reads fall back to a caller-supplied default when the file is
missing or corrupt, and writes never raise. A read-only disk, a full disk or
an unserializable value just means the state lives in memory for the session.
"""

from __future__ import annotations

import enum
import json
import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeVar

from filelock import FileLock, Timeout

from orcamento import config as _config

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOCK_TIMEOUT = 5


class SaveOutcome(enum.Enum):
    OK = "ok"
    UNAVAILABLE = "unavailable"
    SERIALIZATION_ERROR = "serialization_error"


def _file_name(key: str) -> str:
    return key.replace(":", "_").replace("/", "_") + ".json"


def _backup_corrupt(path: Path) -> Path:
    """Rename a corrupt file to a timestamped backup before it gets overwritten."""
    ts = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    backup = path.with_name(f"{path.name}.corrupt.{ts}")
    path.rename(backup)
    logger.warning("Corrupt file backed up: %s → %s", path, backup)
    return backup


class JsonStore:
    """JSON files keyed by name, rooted at ``base_dir`` (the data dir by default)."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        return self._base_dir if self._base_dir is not None else _config.get_data_dir()

    def path_for(self, key: str) -> Path:
        return self.base_dir / _file_name(key)

    @contextmanager
    def _locked(self, path: Path) -> Iterator[None]:
        """Hold an exclusive file lock during read-modify-write of ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        lock = FileLock(path.with_suffix(".lock"), timeout=LOCK_TIMEOUT)
        with lock:
            yield

    def load(self, key: str, fallback: T | Callable[[], T]) -> Any:
        """Return the stored value for ``key``, or ``fallback`` on absence/corruption.

        ``fallback`` may be a zero-argument callable, evaluated only when needed.
        """
        path = self.path_for(key)
        try:
            if not path.exists():
                return _resolve(fallback)
            raw = path.read_bytes()
        except OSError:
            logger.warning("Store unreadable for key %s", key, exc_info=True)
            return _resolve(fallback)
        try:
            return json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, ValueError):
            try:
                _backup_corrupt(path)
            except OSError:
                logger.warning("Could not back up corrupt file %s", path, exc_info=True)
            return _resolve(fallback)

    def save(self, key: str, value: Any) -> SaveOutcome:
        """Write ``value`` as JSON under ``key`` (atomic replace). Never raises."""
        try:
            payload = json.dumps(value, indent=2, ensure_ascii=False) + "\n"
        except (TypeError, ValueError):
            logger.warning("Value for key %s is not JSON serializable", key, exc_info=True)
            return SaveOutcome.SERIALIZATION_ERROR

        path = self.path_for(key)
        try:
            with self._locked(path):
                tmp = path.with_suffix(".tmp")
                tmp.write_text(payload, encoding="utf-8")
                os.replace(tmp, path)
        except (OSError, Timeout):
            logger.warning("Store unavailable, key %s kept in memory only", key, exc_info=True)
            return SaveOutcome.UNAVAILABLE
        return SaveOutcome.OK


def _resolve(fallback: Any) -> Any:
    return fallback() if callable(fallback) else fallback
