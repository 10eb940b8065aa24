from __future__ import annotations

"""
Whole-file JSON objects on disk (the overlay store file, the config file).

Writes go to a temp file in the same directory and are swapped in with
os.replace, so a reader sees either the old object or the new one.
"""

import json
import os
import shutil
import tempfile
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

MISSING = "missing"


@dataclass(frozen=True)
class ReadResult:
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def missing(self) -> bool:
        return self.error == MISSING


def read_json_object(path: str) -> ReadResult:
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        return ReadResult(error=MISSING)
    except json.JSONDecodeError as e:
        return ReadResult(error=f"corrupt_json:{e}")
    except OSError as e:
        return ReadResult(error=str(e))
    if not isinstance(obj, dict):
        return ReadResult(error="not_object")
    return ReadResult(data=obj)


def _snapshot(path: str, backups_dir: str, max_backups: int) -> None:
    """Copy the current file aside and keep only the newest `max_backups` copies."""
    if max_backups <= 0 or not os.path.exists(path):
        return
    os.makedirs(backups_dir, exist_ok=True)
    base = os.path.basename(path)
    shutil.copy2(path, os.path.join(backups_dir, f"{base}.{int(time.time() * 1000)}.bak"))
    snaps = sorted(f for f in os.listdir(backups_dir) if f.startswith(f"{base}.") and f.endswith(".bak"))
    for name in snaps[:-max_backups]:
        os.remove(os.path.join(backups_dir, name))


def write_json_object(path: str, data: Dict[str, Any], *, backups_dir: Optional[str] = None, max_backups: int = 5) -> None:
    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)
    if backups_dir:
        _snapshot(path, backups_dir, max_backups)
    fd, tmp = tempfile.mkstemp(prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, sort_keys=True)
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
