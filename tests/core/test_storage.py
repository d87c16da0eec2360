"""
Tests for the key-value storage backends.
"""

import json

from diceroller.core.storage import JsonFileStore, MemoryStore


def test_memory_store_get_and_set():
    """Test the in-memory store."""
    store = MemoryStore({"a": 1})
    store.set("b", [1, 2])

    assert store.get("a") == 1
    assert store.get("b") == [1, 2]
    assert store.get("missing") is None


def test_json_store_missing_file_starts_empty(tmp_path):
    """Test that a store on a missing file is empty."""
    store = JsonFileStore(tmp_path / "store.json")

    assert store.get("presets") is None
    assert not (tmp_path / "store.json").exists()


def test_json_store_writes_through(tmp_path):
    """Test that values are written to disk and read back by a new store."""
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("settings", {"custom_die_sides": 8})

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "settings": {"custom_die_sides": 8}
    }
    assert JsonFileStore(path).get("settings") == {"custom_die_sides": 8}


def test_json_store_leaves_no_temp_files(tmp_path):
    """Test that the atomic write cleans up after itself."""
    store = JsonFileStore(tmp_path / "store.json")
    store.set("a", 1)
    store.set("b", 2)

    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_json_store_corrupt_file_starts_empty(tmp_path, mocker):
    """Test that an unreadable file is reported and treated as empty."""
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    mock_warning = mocker.patch("diceroller.core.storage.log_warning")

    store = JsonFileStore(path)

    assert store.get("roll_log") is None
    mock_warning.assert_called_once()


def test_json_store_non_object_document_starts_empty(tmp_path, mocker):
    """Test that a document that is not a JSON object is ignored."""
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    mocker.patch("diceroller.core.storage.log_warning")

    store = JsonFileStore(path)
    store.set("a", 1)

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1}
