from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .acquisition.controller import register as register_acquisition
from .batch.controller import register as register_batch
from .container import Container, build_container
from .core.enums import StorageBackend
from .core.logger import setup_logger
from .credentials.controller import register as register_credentials
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(
    settings: Optional[Mapping[str, Any]] = None,
    *,
    container: Optional[Container] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = load_settings(settings_module)
    else:
        settings_module = "<explicit>"

    setup_logger(str(settings.get("LOG_LEVEL", "INFO")))

    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["BATCH_IN_BACKGROUND"] = bool(settings.get("BATCH_IN_BACKGROUND", True))

    backend = str(settings.get("STORAGE_BACKEND", StorageBackend.FILE.value)).lower()
    logger.info("settings=%s storage=%s endpoint=%s", settings_module, backend, settings.get("ATTENDANCE_ENDPOINT"))

    if container is None:
        if backend == StorageBackend.MYSQL.value and bool(settings.get("AUTO_INIT_DB", False)):
            conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings["DB_CONFIG"]))
            apply_schema(conn, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(conn)))
        container = build_container(settings=settings)

    app.extensions["attendance_relay"] = container

    register_credentials(app, container)
    register_acquisition(app, container)
    register_batch(app, container)

    return app
