"""Append-only JSONL record of generation events.

Files live under ``<events_dir>/<YYYYMMDD>/generation_NN.jsonl``. Once a file
reaches ``max_bytes`` the next number is opened; a new day starts again at
``00``. Appends from several threads are serialised per :class:`EventLog`.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional

from project_config import get_section

__all__ = [
    "EventLog",
    "append_event",
    "configure",
    "current_log_path",
    "read_events",
]

_LOGGING_CONFIG = get_section("logging", default={})
DEFAULT_MAX_BYTES = int(_LOGGING_CONFIG.get("max_bytes", 100 * 1024 * 1024))
DEFAULT_EVENTS_DIR = Path(str(_LOGGING_CONFIG.get("events_dir", "logs/generation")))
FILE_PREFIX = "generation"


def _size(path: Path) -> int:
    try:
        return path.stat().st_size
    except FileNotFoundError:
        return 0


class EventLog:
    def __init__(self, base_dir: str | Path, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.base_dir = Path(base_dir)
        self.max_bytes = max_bytes
        self._lock = threading.Lock()
        self._current: Optional[Path] = None

    @property
    def current_path(self) -> Optional[Path]:
        return self._current

    def _target(self, day: str) -> Path:
        day_dir = self.base_dir / day
        day_dir.mkdir(parents=True, exist_ok=True)

        current = self._current
        if current is not None and current.parent == day_dir and _size(current) < self.max_bytes:
            return current

        index = 0
        while True:
            candidate = day_dir / f"{FILE_PREFIX}_{index:02d}.jsonl"
            if _size(candidate) < self.max_bytes:
                self._current = candidate
                return candidate
            index += 1

    def append(self, event: Mapping[str, Any]) -> Path:
        """Write ``event`` as one line and return the file it landed in.

        Every record needs an ``event`` name; a ``ts`` field is added unless
        the caller supplies one.
        """

        if "event" not in event:
            raise ValueError("event records need an 'event' name")
        now = datetime.now(timezone.utc)
        record = {"ts": now.isoformat(timespec="milliseconds"), **event}
        line = json.dumps(record, sort_keys=True, ensure_ascii=False)
        with self._lock:
            path = self._target(now.strftime("%Y%m%d"))
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return path


def read_events(location: str | Path) -> Iterator[Dict[str, Any]]:
    """Yield records from one JSONL file, or from every log file under a directory."""

    root = Path(location)
    files = [root] if root.is_file() else sorted(root.rglob(f"{FILE_PREFIX}_*.jsonl"))
    for path in files:
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if line.strip():
                    yield json.loads(line)


_ACTIVE = EventLog(DEFAULT_EVENTS_DIR)


def configure(base_dir: str | Path, *, max_bytes: int | None = None) -> EventLog:
    """Send subsequent :func:`append_event` calls to ``base_dir``."""

    global _ACTIVE
    _ACTIVE = EventLog(base_dir, max_bytes or DEFAULT_MAX_BYTES)
    return _ACTIVE


def append_event(event: Mapping[str, Any]) -> Path:
    return _ACTIVE.append(event)


def current_log_path() -> Optional[Path]:
    return _ACTIVE.current_path
