from __future__ import annotations

from typing import Optional, Protocol


class CredentialBlobRepository(Protocol):
    """Durable key/value storage for the serialized credential collection."""

    def read_blob(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write_blob(self, key: str, blob: str) -> None:
        raise NotImplementedError
