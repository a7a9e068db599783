from __future__ import annotations

import json

import pytest

from src.site_kiosk.site_kiosk.core.constants import KEY_WORKERS
from src.site_kiosk.site_kiosk.core.exceptions import StorageError
from src.site_kiosk.site_kiosk.database.store import InMemoryStore
from src.site_kiosk.site_kiosk.workers.model import WorkerProfile
from src.site_kiosk.site_kiosk.workers.repository import KeyValueWorkerDirectory


def test_upsert_same_id_replaces_profile(store):
    directory = KeyValueWorkerDirectory(store)
    directory.upsert(WorkerProfile(id="w1", name="Amy", company="Apex", phone="0700"))
    directory.upsert(WorkerProfile(id="w1", name="Amy", company="Brick & Co"))

    assert len(directory.all()) == 1
    found = directory.find("w1")
    assert found.company == "Brick & Co"
    # whole-profile replacement, no field merge
    assert found.phone == ""


def test_insertion_order_kept_on_replace(store):
    directory = KeyValueWorkerDirectory(store)
    directory.upsert(WorkerProfile(id="a", name="A", company="X"))
    directory.upsert(WorkerProfile(id="b", name="B", company="X"))
    directory.upsert(WorkerProfile(id="a", name="A2", company="X"))

    assert [p.id for p in directory.all()] == ["a", "b"]
    assert directory.all()[0].name == "A2"


def test_find_missing_returns_none(store):
    assert KeyValueWorkerDirectory(store).find("nobody") is None


def test_all_returns_snapshot(store):
    directory = KeyValueWorkerDirectory(store)
    directory.upsert(WorkerProfile(id="a", name="A", company="X"))
    snapshot = directory.all()
    directory.upsert(WorkerProfile(id="b", name="B", company="X"))
    assert len(snapshot) == 1


def test_persisted_with_camel_case_fields(store):
    directory = KeyValueWorkerDirectory(store)
    directory.upsert(WorkerProfile(id="a", name="A", company="X", emergency_contact="Mum", vehicle_reg="AB12 CDE"))

    saved = json.loads(store.get(KEY_WORKERS))
    assert saved[0]["emergencyContact"] == "Mum"
    assert saved[0]["vehicleReg"] == "AB12 CDE"
    assert KeyValueWorkerDirectory(store).find("a").vehicle_reg == "AB12 CDE"


def test_search_by_name_or_company(store):
    directory = KeyValueWorkerDirectory(store)
    directory.upsert(WorkerProfile(id="a", name="Amy Lee", company="Apex"))
    directory.upsert(WorkerProfile(id="b", name="Ben Ng", company="Brick & Co"))

    assert [p.id for p in directory.search("lee")] == ["a"]
    assert [p.id for p in directory.search("")] == ["a", "b"]


def test_unparsable_blob_falls_back_and_is_preserved():
    store = InMemoryStore({KEY_WORKERS: "[{not json"})
    directory = KeyValueWorkerDirectory(store)

    assert directory.all() == []
    assert store.get(KEY_WORKERS + ".corrupt") == "[{not json"


def test_malformed_entries_skipped_and_blob_preserved():
    raw = [{"id": "a", "name": "A", "company": "X"}, "junk", {"name": "no id"}]
    store = InMemoryStore({KEY_WORKERS: json.dumps(raw)})
    directory = KeyValueWorkerDirectory(store)

    assert [p.id for p in directory.all()] == ["a"]
    assert json.loads(store.get(KEY_WORKERS + ".corrupt")) == raw


class OfflineStore(InMemoryStore):
    def __init__(self, initial=None):
        super().__init__(initial)
        self.offline = True

    def get(self, key):
        if self.offline:
            raise ConnectionError("store offline")
        return super().get(key)


def test_unreadable_directory_is_read_only_until_reload():
    stored = json.dumps([{"id": "w-old", "name": "Old Timer", "company": "Apex"}])
    store = OfflineStore({KEY_WORKERS: stored})
    directory = KeyValueWorkerDirectory(store)

    assert not directory.loaded
    assert directory.all() == []
    with pytest.raises(StorageError):
        directory.upsert(WorkerProfile(id="w-new", name="Amy", company="Apex"))
    assert store.snapshot()[KEY_WORKERS] == stored

    store.offline = False
    directory.upsert(WorkerProfile(id="w-new", name="Amy", company="Apex"))

    assert directory.loaded
    assert [p["id"] for p in json.loads(store.get(KEY_WORKERS))] == ["w-old", "w-new"]
