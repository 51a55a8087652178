from __future__ import annotations

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so the value survives the blob format."""
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def to_epoch_millis(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    return round(value.timestamp() * 1000)


def from_epoch_millis(value) -> Optional[datetime]:
    """Parse a stored ``lastUsed`` value (epoch milliseconds)."""
    if value is None or value == "":
        return None
    return datetime.fromtimestamp(int(value) / 1000)
