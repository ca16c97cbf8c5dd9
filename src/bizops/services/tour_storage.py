"""Key/value storage backends for tour completion state.

The completion store only needs string get/set/remove, mirroring browser local
storage. Two backends:

 - ``InMemoryStorage``: dict-backed, used by tests and headless sessions.
 - ``JsonFileStorage``: a single JSON object file under a data directory.
   Reads are lazy and cached; each write rewrites the file atomically
   (temp file + replace). A file that cannot be parsed is moved aside with a
   ``.corrupt.<timestamp>`` suffix and treated as empty.

Write failures raise ``OSError``; callers decide whether to swallow them.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from bizops import settings

__all__ = ["KeyValueStorage", "InMemoryStorage", "JsonFileStorage"]

log = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...  # pragma: no cover - structural

    def set_item(self, key: str, value: str) -> None: ...  # pragma: no cover - structural

    def remove_item(self, key: str) -> None: ...  # pragma: no cover - structural


class InMemoryStorage:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items.keys())


class JsonFileStorage:
    def __init__(self, base_dir: str | Path, filename: str = settings.STORAGE_FILENAME) -> None:
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / filename
        self._items: Dict[str, str] | None = None

    # Internal helpers ----------------------------------------------
    def _load(self) -> Dict[str, str]:
        if self._items is not None:
            return self._items
        self._items = {}
        if not self.path.exists():
            return self._items
        try:
            obj = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(obj, dict):
                raise ValueError("storage root must be an object")
            self._items = {str(k): str(v) for k, v in obj.items()}
        except (OSError, ValueError) as exc:
            log.warning("Tour storage %s unreadable (%s); starting empty", self.path, exc)
            self._backup_corrupt()
        return self._items

    def _backup_corrupt(self) -> None:
        backup = self.path.with_name(
            self.path.name + f".corrupt.{datetime.now().strftime('%Y%m%d%H%M%S')}"
        )
        try:
            os.replace(self.path, backup)
        except OSError:  # pragma: no cover
            log.debug("Could not move corrupt storage file %s aside", self.path)

    def _flush(self, items: Dict[str, str]) -> None:
        """Write ``items`` to disk, then adopt them as the cache."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)
        self._items = items

    # Public API ----------------------------------------------------
    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = dict(self._load())
        items[key] = value
        self._flush(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            remaining = dict(items)
            del remaining[key]
            self._flush(remaining)

    def keys(self) -> List[str]:
        return list(self._load().keys())
