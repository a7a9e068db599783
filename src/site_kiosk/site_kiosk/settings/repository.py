from __future__ import annotations

from typing import Protocol

from ..core.constants import KEY_SETTINGS
from ..database.serialization import load_json, save_json
from ..database.store import KeyValueStore
from .model import PolicySettings, merge_stored


class SettingsRepository(Protocol):
    def load(self) -> PolicySettings:
        raise NotImplementedError

    def save(self, settings: PolicySettings) -> None:
        raise NotImplementedError


class KeyValueSettingsRepository(SettingsRepository):
    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> PolicySettings:
        return merge_stored(load_json(self._store, KEY_SETTINGS, dict))

    def save(self, settings: PolicySettings) -> None:
        save_json(self._store, KEY_SETTINGS, settings.to_dict())
