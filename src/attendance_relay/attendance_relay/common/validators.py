from __future__ import annotations

from typing import Any, Optional

from ..core.constants import TOKEN_PREVIEW_LENGTH


def clean_text(value: Any) -> Optional[str]:
    """Trim a loosely-typed input value; blank becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def token_preview(token: str) -> str:
    return f"{(token or '')[:TOKEN_PREVIEW_LENGTH]}..."
