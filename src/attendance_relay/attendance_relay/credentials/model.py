from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import from_epoch_millis, to_epoch_millis


@dataclass(frozen=True)
class CredentialRecord:
    """A stored ERP session: who it belongs to and the cookie that authenticates it."""

    record_id: str
    display_name: str
    session_token: str
    secondary_identifier: Optional[str] = None
    last_used_at: Optional[datetime] = None

    def with_last_used(self, when: datetime) -> "CredentialRecord":
        return replace(self, last_used_at=when)

    def to_dict(self) -> Dict[str, Any]:
        """Blob shape kept compatible with the browser console's localStorage entries."""
        return {
            "id": self.record_id,
            "name": self.display_name,
            "stuId": self.secondary_identifier,
            "connectSid": self.session_token,
            "lastUsed": to_epoch_millis(self.last_used_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CredentialRecord":
        return cls(
            record_id=str(data["id"]),
            display_name=str(data["name"]),
            session_token=str(data["connectSid"] or ""),
            secondary_identifier=data.get("stuId"),
            last_used_at=from_epoch_millis(data.get("lastUsed")),
        )
