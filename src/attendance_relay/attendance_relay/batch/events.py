from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from ..core.enums import LogStatus


@dataclass(frozen=True)
class LogAppended:
    subject_name: str
    target_identifier: str
    status: LogStatus
    message: str


@dataclass(frozen=True)
class RecordStamped:
    record_id: str
    when: datetime


BatchEvent = Union[LogAppended, RecordStamped]


@dataclass(frozen=True)
class BatchSummary:
    target_identifier: str
    attempted: int
    succeeded: int
    failed: int
