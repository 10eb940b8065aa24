from __future__ import annotations

from fitness_app.core.persistence.kv_store import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from fitness_app.core.persistence.overlay_store import OverlayStore

__all__ = ["JsonFileKeyValueStore", "KeyValueStore", "MemoryKeyValueStore", "OverlayStore"]
