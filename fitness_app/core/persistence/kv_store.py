from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from fitness_app.core.persistence.json_file import read_json_object, write_json_object


class KeyValueStore(Protocol):
    """String-keyed store of JSON blobs, shaped like browser local storage."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


@dataclass
class MemoryKeyValueStore:
    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileKeyValueStore:
    """
    Process-local store persisted as one JSON object: {key: blob}.

    Every mutation rewrites the whole file atomically. There is no cross-process
    locking; concurrent writers race and the last write wins.
    """

    def __init__(self, path: str, *, backups_dir: Optional[str] = None, max_backups: int = 5, logger: Any = None):
        self.path = path
        self.backups_dir = backups_dir
        self.max_backups = int(max_backups)
        self.logger = logger or logging.getLogger("fitness_app.store")
        if os.path.dirname(path):
            os.makedirs(os.path.dirname(path), exist_ok=True)

    def _read_all(self) -> Dict[str, str]:
        rr = read_json_object(self.path)
        if not rr.ok:
            if not rr.missing:
                self.logger.warning("Overlay store unreadable (%s); treating as empty.", rr.error)
            return {}
        return {str(k): v for k, v in rr.data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        write_json_object(self.path, items, backups_dir=self.backups_dir, max_backups=self.max_backups)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = str(value)
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)
