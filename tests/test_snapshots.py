"""On-disk JSON snapshots of store contents."""
import json
from pathlib import Path

from hotelstream.storage.snapshots import FILES, SnapshotStore


def test_load_missing_file_returns_empty_list(tmp_path: Path):
    store = SnapshotStore(tmp_path / "data")

    assert store.load(FILES["stats"]) == []
    assert store.load("other.json", {"fallback": True}) == {"fallback": True}


def test_load_corrupt_file_returns_default_and_logs(tmp_path: Path, caplog):
    (tmp_path / "stats.json").write_text("{not json", encoding="utf-8")
    caplog.set_level("ERROR")

    assert SnapshotStore(tmp_path).load("stats.json") == []
    assert "stats.json" in caplog.text


def test_save_creates_directory_and_writes_indented_json(tmp_path: Path):
    store = SnapshotStore(tmp_path / "nested" / "data")

    store.save("events.json", [{"event_id": "E1"}])

    path = tmp_path / "nested" / "data" / "events.json"
    assert json.loads(path.read_text(encoding="utf-8")) == [{"event_id": "E1"}]
    assert "\n  " in path.read_text(encoding="utf-8")


def test_append_trims_oldest_entries(tmp_path: Path):
    store = SnapshotStore(tmp_path)
    store.save("balances.json", [0, 1, 2])

    result = store.append("balances.json", [3, 4, 5], max_items=4)

    assert result == [2, 3, 4, 5]
    assert store.load("balances.json") == [2, 3, 4, 5]


def test_append_replaces_non_list_document(tmp_path: Path):
    store = SnapshotStore(tmp_path)
    store.save("webhook.json", {"unexpected": "object"})

    assert store.append("webhook.json", ["a"]) == ["a"]
