from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..core.enums import LogStatus


@dataclass(frozen=True)
class LogEntry:
    """One line of the outcome log. Never updated after it is appended."""

    entry_id: str
    timestamp: datetime
    subject_name: str
    target_identifier: str
    status: LogStatus
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.entry_id,
            "timestamp": self.timestamp.isoformat(timespec="milliseconds"),
            "userName": self.subject_name,
            "attendanceId": self.target_identifier,
            "status": self.status.value,
            "message": self.message,
        }
