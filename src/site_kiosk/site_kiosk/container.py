from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .attendance.factory import SignRulesFactory
from .attendance.service import KioskService, KioskState
from .core.enums import StorageBackend
from .database.connection import DBConfig, DatabaseConnection
from .database.json_file_store import JsonFileStore
from .database.mysql_kv_store import MySQLKeyValueStore
from .database.store import InMemoryStore, KeyValueStore
from .reports.service import AttendanceReportService
from .settings.repository import KeyValueSettingsRepository
from .settings.service import SettingsService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    state: KioskState

    settings_service: SettingsService
    kiosk_service: KioskService


def build_store(
    backend: StorageBackend | str,
    *,
    data_file: Optional[str | Path] = None,
    db_config: Optional[dict] = None,
) -> KeyValueStore:
    backend = StorageBackend(backend)
    if backend == StorageBackend.MEMORY:
        return InMemoryStore()
    if backend == StorageBackend.JSON:
        if not data_file:
            raise ValueError("DATA_FILE is required for the json storage backend")
        return JsonFileStore(data_file)
    if not db_config:
        raise ValueError("DB_CONFIG is required for the mysql storage backend")
    return MySQLKeyValueStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))


def build_container(*, store: KeyValueStore) -> Container:
    state = KioskState(store)
    settings_service = SettingsService(KeyValueSettingsRepository(store))
    kiosk_service = KioskService(
        state,
        settings_service,
        rules_factory=SignRulesFactory(),
        reports=AttendanceReportService(),
    )

    logger.info(
        "Kiosk state loaded: %d workers, %d visits, %d on site",
        len(state.workers.all()),
        kiosk_service.visit_count(),
        len(state.roster.on_site_ids()),
    )

    return Container(
        store=store,
        state=state,
        settings_service=settings_service,
        kiosk_service=kiosk_service,
    )
