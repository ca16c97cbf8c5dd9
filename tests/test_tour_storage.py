import json
import os

import pytest

from bizops.services.tour_storage import InMemoryStorage, JsonFileStorage


def test_in_memory_storage_basic():
    s = InMemoryStorage({"a": "1"})
    assert s.get_item("a") == "1"
    s.set_item("b", "2")
    s.remove_item("a")
    s.remove_item("missing")
    assert s.keys() == ["b"]


def test_json_file_storage_roundtrip(tmp_path):
    s = JsonFileStorage(tmp_path / "nested")
    assert s.get_item("k") is None
    s.set_item("k", '["clients-tour"]')
    again = JsonFileStorage(tmp_path / "nested")
    assert again.get_item("k") == '["clients-tour"]'
    assert json.loads((tmp_path / "nested" / "tour_storage.json").read_text("utf-8")) == {
        "k": '["clients-tour"]'
    }
    again.remove_item("k")
    assert JsonFileStorage(tmp_path / "nested").keys() == []


def test_json_file_storage_corrupt_backup(tmp_path):
    path = tmp_path / "tour_storage.json"
    path.write_text("{ not valid json", encoding="utf-8")
    s = JsonFileStorage(tmp_path)
    assert s.get_item("anything") is None
    backups = [p for p in os.listdir(tmp_path) if p.startswith("tour_storage.json.corrupt")]
    assert backups, "Expected corrupt backup file"
    s.set_item("k", "v")
    assert JsonFileStorage(tmp_path).get_item("k") == "v"


def test_json_file_storage_rejects_non_object_root(tmp_path):
    (tmp_path / "tour_storage.json").write_text("[1, 2]", encoding="utf-8")
    assert JsonFileStorage(tmp_path).keys() == []


def test_failed_write_leaves_cache_unchanged(tmp_path):
    s = JsonFileStorage(tmp_path)
    s.set_item("k", "old")
    (tmp_path / "tour_storage.json.tmp").mkdir()  # write_text on a directory fails
    with pytest.raises(OSError):
        s.set_item("k", "new")
    assert s.get_item("k") == "old"
    with pytest.raises(OSError):
        s.remove_item("k")
    assert s.keys() == ["k"]
