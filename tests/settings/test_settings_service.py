from __future__ import annotations

import json

import pytest

from src.site_kiosk.site_kiosk.core.constants import KEY_SETTINGS
from src.site_kiosk.site_kiosk.core.exceptions import AuthorizationError, StorageError
from src.site_kiosk.site_kiosk.database.store import InMemoryStore
from src.site_kiosk.site_kiosk.settings.model import PolicySettings, SettingsPatch, merge_stored
from src.site_kiosk.site_kiosk.settings.repository import KeyValueSettingsRepository
from src.site_kiosk.site_kiosk.settings.service import SettingsService


def make_service(store) -> SettingsService:
    return SettingsService(KeyValueSettingsRepository(store))


def test_defaults_when_nothing_stored(store):
    settings = make_service(store).get()
    assert settings == PolicySettings()
    assert settings.admin_pin == "1234"
    assert settings.require_ppe == frozenset({"boots", "hivis", "hardhat"})


def test_partial_stored_blob_layered_onto_defaults():
    store = InMemoryStore({KEY_SETTINGS: json.dumps({"siteName": "Depot 4", "requireRAMS": False, "legacy": 1})})
    settings = make_service(store).get()

    assert settings.site_name == "Depot 4"
    assert settings.require_rams is False
    assert settings.require_induction is True
    assert settings.admin_pin == "1234"


def test_wrongly_typed_fields_fall_back_to_defaults():
    settings = merge_stored({"requireInduction": "no", "requirePPE": "boots", "adminPin": 99})
    assert settings == PolicySettings()
    assert merge_stored(["not", "a", "dict"]) == PolicySettings()


def test_unparsable_settings_fall_back_and_are_preserved():
    store = InMemoryStore({KEY_SETTINGS: "{broken"})
    assert make_service(store).get() == PolicySettings()
    assert store.get(KEY_SETTINGS + ".corrupt") == "{broken"


def test_update_replaces_only_given_fields_and_persists(store):
    svc = make_service(store)
    updated = svc.update(SettingsPatch(admin_pin="9876", require_ppe=frozenset({"gloves"})))

    assert updated.admin_pin == "9876"
    assert updated.require_ppe == frozenset({"gloves"})
    assert updated.site_name == PolicySettings().site_name

    saved = json.loads(store.get(KEY_SETTINGS))
    assert saved["adminPin"] == "9876"
    assert saved["requirePPE"] == ["gloves"]
    assert make_service(store).get() == updated


def test_patch_can_switch_requirements_off():
    patched = SettingsPatch(require_induction=False, require_ppe=frozenset()).apply(PolicySettings())
    assert patched.require_induction is False
    assert patched.require_ppe == frozenset()
    assert patched.require_rams is True


def test_patch_from_dict_and_is_empty():
    patch = SettingsPatch.from_dict({"requirePPE": ["boots", "boots"], "siteName": "Yard"})
    assert patch.require_ppe == frozenset({"boots"})
    assert patch.site_name == "Yard"
    assert not patch.is_empty()
    assert SettingsPatch.from_dict({"unknown": True}).is_empty()


class UnreadableStore(InMemoryStore):
    """Reads of the listed keys raise until they are switched back on."""

    def __init__(self, initial=None, failing=()):
        super().__init__(initial)
        self.failing = set(failing)

    def get(self, key):
        if key in self.failing:
            raise ConnectionError("store offline")
        return super().get(key)


def test_authorize_admin_is_exact_match(store):
    svc = make_service(store)
    svc.authorize_admin("1234")
    for wrong in (" 1234", "", None):
        with pytest.raises(AuthorizationError):
            svc.authorize_admin(wrong)

    svc.update(SettingsPatch(admin_pin="0000"))
    svc.authorize_admin("0000")
    with pytest.raises(AuthorizationError):
        svc.authorize_admin("1234")


def test_unreadable_settings_serve_defaults_without_caching_them():
    stored = {"adminPin": "9999", "siteName": "Custom"}
    store = UnreadableStore({KEY_SETTINGS: json.dumps(stored)}, failing={KEY_SETTINGS})
    svc = make_service(store)

    assert svc.get() == PolicySettings()

    store.failing.clear()
    assert svc.get().site_name == "Custom"


def test_update_never_saves_over_settings_it_could_not_read():
    stored = {"adminPin": "9999", "siteName": "Custom"}
    store = UnreadableStore({KEY_SETTINGS: json.dumps(stored)}, failing={KEY_SETTINGS})
    svc = make_service(store)
    svc.get()

    with pytest.raises(StorageError):
        svc.update(SettingsPatch(require_rams=False))
    assert json.loads(store.snapshot()[KEY_SETTINGS]) == stored

    store.failing.clear()
    updated = svc.update(SettingsPatch(require_rams=False))

    assert (updated.admin_pin, updated.site_name, updated.require_rams) == ("9999", "Custom", False)
    saved = json.loads(store.get(KEY_SETTINGS))
    assert (saved["adminPin"], saved["siteName"]) == ("9999", "Custom")


def test_admin_gate_does_not_fall_back_to_default_pin():
    store = UnreadableStore({KEY_SETTINGS: json.dumps({"adminPin": "9999"})}, failing={KEY_SETTINGS})
    svc = make_service(store)

    with pytest.raises(StorageError):
        svc.authorize_admin("1234")
