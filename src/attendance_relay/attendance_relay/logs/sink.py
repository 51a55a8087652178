from __future__ import annotations

import csv
import io
import threading
import uuid
from collections import deque
from datetime import datetime
from typing import Callable, Deque, List, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOG_CAPACITY
from ..core.enums import LogStatus
from .model import LogEntry

CSV_FIELDS = ["timestamp", "userName", "attendanceId", "status", "message"]


class LogSink:
    """Bounded outcome history, newest entry first."""

    def __init__(self, *, capacity: int = DEFAULT_LOG_CAPACITY, clock: Optional[Callable[[], datetime]] = None):
        if int(capacity) < 1:
            raise ValueError("capacity must be positive")
        self._entries: Deque[LogEntry] = deque(maxlen=int(capacity))
        self._clock = clock or now_local
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(self, *, subject_name: str, target_identifier: str, status: LogStatus, message: str) -> LogEntry:
        entry = LogEntry(
            entry_id=uuid.uuid4().hex,
            timestamp=self._clock(),
            subject_name=subject_name,
            target_identifier=target_identifier,
            status=LogStatus(status),
            message=message,
        )
        with self._lock:
            # appendleft on a bounded deque drops the oldest entry from the right.
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export_csv(self) -> bytes:
        """CSV of the current entries, newest first, with a BOM for spreadsheet apps."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for entry in self.entries():
            writer.writerow(entry.to_dict())
        return out.getvalue().encode("utf-8-sig")
