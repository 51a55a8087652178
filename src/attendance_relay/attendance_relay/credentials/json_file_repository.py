from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from .repository import CredentialBlobRepository


class JsonFileBlobRepository(CredentialBlobRepository):
    """One ``<key>.json`` file per namespace key under a storage directory."""

    _SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, storage_dir: str | Path):
        self._dir = Path(storage_dir)

    def _path_for(self, key: str) -> Path:
        return self._dir / f"{self._SAFE_KEY.sub('_', key)}.json"

    def read_blob(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write_blob(self, key: str, blob: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        # Write then rename so a crash never leaves half a blob behind.
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(blob, encoding="utf-8")
        tmp.replace(path)
