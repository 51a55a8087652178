from __future__ import annotations

from enum import Enum


class LogStatus(str, Enum):
    """Outcome of one attendance attempt as shown in the log."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class RunnerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class StorageBackend(str, Enum):
    """Where the credential blob is persisted."""

    FILE = "file"
    MYSQL = "mysql"
