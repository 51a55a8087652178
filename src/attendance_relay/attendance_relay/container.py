from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import requests

from .acquisition.service import IdentifierService
from .batch.runner import BatchRunner, SubmitFn
from .core.constants import (
    DEFAULT_ATTENDANCE_ENDPOINT,
    DEFAULT_ERP_ORIGIN,
    DEFAULT_ERP_REFERER,
    DEFAULT_LOG_CAPACITY,
    DEFAULT_PACING_DELAY_SECONDS,
    DEFAULT_USER_AGENT,
    STORAGE_KEY,
)
from .core.enums import StorageBackend
from .credentials.json_file_repository import JsonFileBlobRepository
from .credentials.mysql_blob_repository import MySQLBlobRepository
from .credentials.repository import CredentialBlobRepository
from .credentials.service import CredentialStore
from .database.connection import DBConfig, DatabaseConnection
from .logs.sink import LogSink
from .submission.client import AttendanceClient, ErpEndpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    blob_repo: CredentialBlobRepository
    attendance_client: Optional[AttendanceClient]

    credential_store: CredentialStore
    log_sink: LogSink
    identifier_service: IdentifierService
    batch_runner: BatchRunner


def build_blob_repository(settings: Mapping[str, Any]) -> CredentialBlobRepository:
    backend = StorageBackend(str(settings.get("STORAGE_BACKEND", StorageBackend.FILE.value)).lower())
    if backend == StorageBackend.MYSQL:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings["DB_CONFIG"]))
        return MySQLBlobRepository(conn)
    return JsonFileBlobRepository(Path(settings.get("STORAGE_DIR", "instance")))


def build_container(
    *,
    settings: Mapping[str, Any],
    blob_repo: Optional[CredentialBlobRepository] = None,
    submit: Optional[SubmitFn] = None,
    session: Optional[requests.Session] = None,
) -> Container:
    """Wire the services from a settings mapping.

    ``blob_repo`` and ``submit`` override the configured storage backend and
    the real ERP client (tests pass fakes here).
    """
    blob_repo = blob_repo or build_blob_repository(settings)

    credential_store = CredentialStore(blob_repo, storage_key=str(settings.get("STORAGE_KEY", STORAGE_KEY)))
    credential_store.hydrate()

    log_sink = LogSink(capacity=int(settings.get("LOG_CAPACITY", DEFAULT_LOG_CAPACITY)))
    identifier_service = IdentifierService()

    attendance_client: Optional[AttendanceClient] = None
    if submit is None:
        attendance_client = AttendanceClient(
            ErpEndpoint(
                url=str(settings.get("ATTENDANCE_ENDPOINT", DEFAULT_ATTENDANCE_ENDPOINT)),
                origin=str(settings.get("ERP_ORIGIN", DEFAULT_ERP_ORIGIN)),
                referer=str(settings.get("ERP_REFERER", DEFAULT_ERP_REFERER)),
                user_agent=str(settings.get("USER_AGENT", DEFAULT_USER_AGENT)),
            ),
            session=session,
        )
        submit = attendance_client.submit

    batch_runner = BatchRunner(
        credential_store,
        log_sink,
        submit,
        identifier_service,
        pacing_seconds=float(settings.get("PACING_DELAY_SECONDS", DEFAULT_PACING_DELAY_SECONDS)),
        auto_execute=bool(settings.get("AUTO_EXECUTE", False)),
    )

    logger.debug("Container ready (storage=%s)", type(blob_repo).__name__)
    return Container(
        blob_repo=blob_repo,
        attendance_client=attendance_client,
        credential_store=credential_store,
        log_sink=log_sink,
        identifier_service=identifier_service,
        batch_runner=batch_runner,
    )
