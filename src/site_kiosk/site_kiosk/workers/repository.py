from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from ..core.constants import KEY_WORKERS
from ..core.exceptions import StorageError
from ..database.serialization import load_json, preserve, save_json
from ..database.store import KeyValueStore
from .model import WorkerProfile

logger = logging.getLogger(__name__)


class WorkerDirectory(Protocol):
    """Interface for the worker directory.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def upsert(self, profile: WorkerProfile) -> None:
        raise NotImplementedError

    def find(self, worker_id: str) -> Optional[WorkerProfile]:
        raise NotImplementedError

    def all(self) -> Sequence[WorkerProfile]:
        raise NotImplementedError

    def search(self, term: str) -> Sequence[WorkerProfile]:
        raise NotImplementedError


def matches(profile: WorkerProfile, term: str) -> bool:
    """Case-insensitive substring over "name company"."""
    return term.strip().lower() in f"{profile.name} {profile.company}".lower()


class KeyValueWorkerDirectory(WorkerDirectory):
    """Directory held in memory, loaded once and saved whole after each change.

    If the store cannot be read, the directory shows as empty and refuses
    writes until reload() succeeds.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._profiles: list[WorkerProfile] = []
        self.loaded = False
        self.reload()

    def reload(self) -> bool:
        try:
            self._profiles = self._load()
        except StorageError:
            logger.exception("Workers could not be read; directory is read-only until reloaded")
            self.loaded = False
            return False
        self.loaded = True
        return True

    def _load(self) -> list[WorkerProfile]:
        raw = load_json(self._store, KEY_WORKERS, list)
        if not isinstance(raw, list):
            logger.warning("Ignoring stored workers: expected a list, got %s", type(raw).__name__)
            preserve(self._store, KEY_WORKERS, raw)
            return []

        skipped = False
        profiles: dict[str, WorkerProfile] = {}
        for item in raw:
            if not isinstance(item, dict) or not item.get("id"):
                logger.warning("Skipping malformed worker entry: %r", item)
                skipped = True
                continue
            profile = WorkerProfile.from_dict(item)
            # Same id twice in a hand-edited blob: keep the later one, first position.
            profiles[profile.id] = profile

        if skipped:
            preserve(self._store, KEY_WORKERS, raw)
        return list(profiles.values())

    def upsert(self, profile: WorkerProfile) -> None:
        if not self.loaded and not self.reload():
            raise StorageError("Stored workers could not be read; not overwriting them")

        profiles = list(self._profiles)
        for i, existing in enumerate(profiles):
            if existing.id == profile.id:
                profiles[i] = profile
                break
        else:
            profiles.append(profile)

        save_json(self._store, KEY_WORKERS, [p.to_dict() for p in profiles])
        self._profiles = profiles

    def find(self, worker_id: str) -> Optional[WorkerProfile]:
        for p in self._profiles:
            if p.id == worker_id:
                return p
        return None

    def all(self) -> Sequence[WorkerProfile]:
        return list(self._profiles)

    def search(self, term: str) -> Sequence[WorkerProfile]:
        if not term or not term.strip():
            return self.all()
        return [p for p in self._profiles if matches(p, term)]

    def replace_all(self, profiles: Sequence[WorkerProfile]) -> None:
        """In-memory swap only; the caller persists (used by the atomic reset)."""
        self._profiles = list(profiles)
        self.loaded = True
