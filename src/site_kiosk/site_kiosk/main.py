from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_kiosk
from .common.logging_setup import configure_logging
from .container import build_container, build_store
from .core.enums import StorageBackend
from .database.bootstrap import apply_schema
from .database.store import KeyValueStore
from .settings.controller import register as register_admin

logger = logging.getLogger(__name__)


def create_app(*, store: Optional[KeyValueStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    backend = StorageBackend(getattr(settings, "STORAGE_BACKEND", StorageBackend.JSON.value))
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s storage=%s", settings_module, backend.value)

    if store is None:
        if backend == StorageBackend.MYSQL and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (%s)", schema_path)
        store = build_store(backend, data_file=getattr(settings, "DATA_FILE", None), db_config=db_config)

    container = build_container(store=store)
    app.extensions["site_kiosk"] = container

    register_kiosk(app, container)
    register_admin(app, container)

    return app
