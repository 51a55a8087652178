from __future__ import annotations

import io
import logging
import threading
from typing import Optional

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..common.validators import clean_text
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def decode_qr_image(image_bytes: bytes) -> Optional[str]:
    """Return the text of the QR code in an uploaded JPG/PNG, if one is readable."""
    try:
        image = Image.open(io.BytesIO(image_bytes)).convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Could not read the uploaded image") from e

    frame = cv2.cvtColor(np.array(image), cv2.COLOR_RGB2BGR)
    detector = cv2.QRCodeDetector()

    data, _, _ = detector.detectAndDecode(frame)
    if not data:
        # Fall back to an equalized grayscale copy.
        gray = cv2.equalizeHist(cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY))
        data, _, _ = detector.detectAndDecode(gray)

    return clean_text(data)


class IdentifierService:
    """Holds the attendance identifier the next batch run will use."""

    def __init__(self, initial: str = ""):
        self._current = clean_text(initial) or ""
        self._lock = threading.Lock()

    @property
    def current(self) -> str:
        with self._lock:
            return self._current

    def set_manual(self, value: str) -> str:
        with self._lock:
            self._current = clean_text(value) or ""
            return self._current

    def set_from_image(self, image_bytes: bytes) -> str:
        if not image_bytes:
            raise ValidationError("No image uploaded")

        text = decode_qr_image(image_bytes)
        if not text:
            raise ValidationError("No QR code found in the image")

        logger.info("Scanned attendance identifier %s", text)
        return self.set_manual(text)

    def clear(self) -> None:
        with self._lock:
            self._current = ""
