from __future__ import annotations

import json
import uuid
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..common.validators import clean_text
from ..core.exceptions import MalformedInputError
from .model import CredentialRecord

TOKEN_ALIASES = ("connectSid", "connect_sid", "connect.sid")
NAME_ALIASES = ("name", "displayName", "display_name")
SECONDARY_ALIASES = ("stuId", "StuId", "StuID", "CmStuId", "stu_id")


def new_record_id() -> str:
    return uuid.uuid4().hex


def placeholder_name(position: int) -> str:
    return f"User {position}"


def _first_present(data: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    for key in aliases:
        value = clean_text(data.get(key))
        if value:
            return value
    return None


def coerce_record(data: Any, *, name_for: Callable[[], str]) -> Optional[CredentialRecord]:
    """Turn one imported element into a record, or None when it has no usable token.

    ``name_for`` is only called when the element carries no name of its own.
    """
    if not isinstance(data, Mapping):
        return None

    token = _first_present(data, TOKEN_ALIASES)
    if not token:
        return None

    return CredentialRecord(
        record_id=clean_text(data.get("id")) or new_record_id(),
        display_name=_first_present(data, NAME_ALIASES) or name_for(),
        session_token=token,
        secondary_identifier=_first_present(data, SECONDARY_ALIASES),
    )


def parse_bulk_payload(raw_json: str, *, first_position: int = 1) -> List[CredentialRecord]:
    """Parse a bulk import payload.

    The whole payload is rejected when it is not a JSON array; individual
    elements without a session token are skipped.
    """
    try:
        parsed = json.loads(raw_json or "")
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise MalformedInputError("Import payload must be a JSON array")

    records: List[CredentialRecord] = []
    for item in parsed:
        position = first_position + len(records)
        record = coerce_record(item, name_for=lambda: placeholder_name(position))
        if record is not None:
            records.append(record)
    return records
