from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import truncate_to_millis
from ..common.validators import clean_text
from ..core.constants import STORAGE_KEY
from .importer import new_record_id, parse_bulk_payload, placeholder_name
from .model import CredentialRecord
from .repository import CredentialBlobRepository

logger = logging.getLogger(__name__)


class CredentialStore:
    """Ordered collection of credential records mirrored to a blob repository.

    Every mutation rewrites the whole collection under ``storage_key``.
    """

    def __init__(self, repository: CredentialBlobRepository, *, storage_key: str = STORAGE_KEY):
        self._repository = repository
        self._storage_key = storage_key
        self._records: List[CredentialRecord] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def list_records(self) -> List[CredentialRecord]:
        with self._lock:
            return list(self._records)

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        with self._lock:
            for record in self._records:
                if record.record_id == record_id:
                    return record
        return None

    # ---- persistence -------------------------------------------------

    def serialize(self) -> str:
        with self._lock:
            return json.dumps([r.to_dict() for r in self._records], ensure_ascii=False)

    def hydrate(self) -> int:
        """Load the stored collection; unreadable data leaves the store empty."""
        blob = self._repository.read_blob(self._storage_key)
        if blob is None:
            return 0

        try:
            data = json.loads(blob)
            if not isinstance(data, list):
                raise ValueError("stored credentials are not a list")
            records = [CredentialRecord.from_dict(item) for item in data]
        except (TypeError, ValueError, KeyError, OverflowError, OSError) as e:
            logger.error("Failed to load stored credentials from %s: %s", self._storage_key, e)
            records = []

        records = [r for r in records if r.session_token.strip()]
        with self._lock:
            self._records = records
        logger.info("Loaded %d stored credential(s)", len(records))
        return len(records)

    def _save(self) -> None:
        self._repository.write_blob(self._storage_key, self.serialize())

    # ---- mutations ---------------------------------------------------

    def add(self, record: CredentialRecord) -> Optional[CredentialRecord]:
        token = clean_text(record.session_token)
        if not token:
            logger.debug("Dropped credential %r without a session token", record.display_name)
            return None

        with self._lock:
            record = replace(record, session_token=token)
            if any(r.record_id == record.record_id for r in self._records):
                record = replace(record, record_id=new_record_id())
            self._records.append(record)
            self._save()
        return record

    def quick_add(
        self,
        session_token: str,
        *,
        display_name: Optional[str] = None,
        secondary_identifier: Optional[str] = None,
    ) -> Optional[CredentialRecord]:
        with self._lock:
            record = CredentialRecord(
                record_id=new_record_id(),
                display_name=clean_text(display_name) or placeholder_name(len(self._records) + 1),
                session_token=session_token or "",
                secondary_identifier=clean_text(secondary_identifier),
            )
            return self.add(record)

    def remove(self, record_id: str) -> bool:
        with self._lock:
            remaining = [r for r in self._records if r.record_id != record_id]
            if len(remaining) == len(self._records):
                return False
            self._records = remaining
            self._save()
        return True

    def bulk_import(self, raw_json: str) -> List[CredentialRecord]:
        """Append every usable element of a JSON array.

        Raises MalformedInputError before touching the store when the payload
        is not a JSON array.
        """
        with self._lock:
            parsed = parse_bulk_payload(raw_json, first_position=len(self._records) + 1)
            admitted: List[CredentialRecord] = []
            taken = {r.record_id for r in self._records}
            for record in parsed:
                if record.record_id in taken:
                    record = replace(record, record_id=new_record_id())
                taken.add(record.record_id)
                admitted.append(record)

            if admitted:
                self._records.extend(admitted)
                self._save()

        logger.info("Imported %d credential(s)", len(admitted))
        return admitted

    def stamp_last_used(self, record_id: str, when: datetime) -> Optional[CredentialRecord]:
        with self._lock:
            for index, record in enumerate(self._records):
                if record.record_id == record_id:
                    updated = record.with_last_used(truncate_to_millis(when))
                    self._records[index] = updated
                    self._save()
                    return updated
        return None
