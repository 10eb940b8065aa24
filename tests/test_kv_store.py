from __future__ import annotations

import json
import os

from fitness_app.core.persistence import JsonFileKeyValueStore, MemoryKeyValueStore, OverlayStore


def test_memory_store_roundtrip():
    kv = MemoryKeyValueStore()
    assert kv.get_item("a") is None
    kv.set_item("a", "[1]")
    assert kv.get_item("a") == "[1]"
    kv.remove_item("a")
    kv.remove_item("a")
    assert kv.get_item("a") is None


def test_file_store_persists_across_instances(tmp_path):
    path = str(tmp_path / "runtime" / "store.json")
    kv = JsonFileKeyValueStore(path, backups_dir=str(tmp_path / "runtime" / "backups"))
    kv.set_item("deleted_users", '["1"]')
    kv.set_item("session", '{"identity": "1"}')

    again = JsonFileKeyValueStore(path)
    assert again.get_item("deleted_users") == '["1"]'
    again.remove_item("session")
    assert JsonFileKeyValueStore(path).get_item("session") is None

    with open(path, "r", encoding="utf-8") as f:
        assert json.load(f) == {"deleted_users": '["1"]'}
    # the second write made a prewrite backup
    assert os.listdir(str(tmp_path / "runtime" / "backups"))


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{ nope", encoding="utf-8")
    kv = JsonFileKeyValueStore(str(path))
    assert kv.get_item("anything") is None
    kv.set_item("x", "1")
    assert JsonFileKeyValueStore(str(path)).get_item("x") == "1"


def test_overlay_store_degrades_on_bad_json(caplog):
    kv = MemoryKeyValueStore(items={"deleted_users": "[oops"})
    store = OverlayStore(kv)
    with caplog.at_level("ERROR", logger="fitness_app.store"):
        assert store.load_json("deleted_users", []) == []
    assert any("deleted_users" in r.getMessage() for r in caplog.records)


def test_file_store_keeps_bounded_backups_and_no_temp_files(tmp_path):
    path = str(tmp_path / "store.json")
    backups = str(tmp_path / "backups")
    kv = JsonFileKeyValueStore(path, backups_dir=backups, max_backups=2)
    for i in range(6):
        kv.set_item("k", str(i))

    snaps = os.listdir(backups)
    assert 1 <= len(snaps) <= 2
    assert all(name.startswith("store.json.") and name.endswith(".bak") for name in snaps)
    assert sorted(os.listdir(str(tmp_path))) == ["backups", "store.json"]
    assert kv.get_item("k") == "5"
