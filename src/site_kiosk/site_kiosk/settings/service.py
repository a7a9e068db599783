from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import AuthorizationError, StorageError
from .model import PolicySettings, SettingsPatch
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and change site policy (admin).

    Settings are cached after the first successful read. While the store
    cannot be read, get() serves the defaults without caching them, and
    update() and the admin gate raise StorageError rather than act on them.
    """

    def __init__(self, repo: SettingsRepository):
        self._repo = repo
        self._current: Optional[PolicySettings] = None

    def _stored(self) -> PolicySettings:
        if self._current is None:
            self._current = self._repo.load()
        return self._current

    def get(self) -> PolicySettings:
        try:
            return self._stored()
        except StorageError:
            logger.exception("Settings could not be read; serving defaults until they can")
            return PolicySettings()

    def update(self, patch: SettingsPatch) -> PolicySettings:
        updated = patch.apply(self._stored())
        self._repo.save(updated)
        self._current = updated

        changed = sorted(k for k, v in vars(patch).items() if v is not None and k != "admin_pin")
        if patch.admin_pin is not None:
            changed.append("admin_pin")
        logger.info("Settings updated: %s", ", ".join(changed) or "nothing")
        return updated

    def authorize_admin(self, pin: Optional[str]) -> None:
        """Exact string comparison; the PIN only gates the admin view."""
        if pin is None or pin != self._stored().admin_pin:
            raise AuthorizationError("Wrong PIN")
