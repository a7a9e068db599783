from __future__ import annotations

import json

from src.site_kiosk.site_kiosk.core.constants import KEY_VISITS, KEY_WORKERS
from src.site_kiosk.site_kiosk.database.json_file_store import JsonFileStore
from src.site_kiosk.site_kiosk.database.serialization import load_json, save_json


def test_missing_file_starts_empty(tmp_path):
    store = JsonFileStore(tmp_path / "kiosk.json")
    assert store.get(KEY_WORKERS) is None
    assert not store.path.exists()


def test_values_survive_reopen(tmp_path):
    path = tmp_path / "data" / "kiosk.json"
    store = JsonFileStore(path)
    save_json(store, KEY_WORKERS, [{"id": "w1", "name": "Amy"}])

    reopened = JsonFileStore(path)
    assert load_json(reopened, KEY_WORKERS, list) == [{"id": "w1", "name": "Amy"}]


def test_set_many_writes_all_keys(tmp_path):
    path = tmp_path / "kiosk.json"
    store = JsonFileStore(path)
    store.set_many({KEY_WORKERS: "[]", KEY_VISITS: "[]"})

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {KEY_WORKERS: "[]", KEY_VISITS: "[]"}


def test_corrupt_file_moved_aside(tmp_path):
    path = tmp_path / "kiosk.json"
    path.write_text("{ definitely not json", encoding="utf-8")

    store = JsonFileStore(path)

    assert store.get(KEY_WORKERS) is None
    moved = list(tmp_path.glob("kiosk.json.corrupt-*"))
    assert len(moved) == 1
    assert moved[0].read_text(encoding="utf-8") == "{ definitely not json"


def test_non_string_values_are_reserialized(tmp_path):
    path = tmp_path / "kiosk.json"
    path.write_text(json.dumps({KEY_WORKERS: [{"id": "w1"}]}), encoding="utf-8")

    store = JsonFileStore(path)
    assert load_json(store, KEY_WORKERS, list) == [{"id": "w1"}]
