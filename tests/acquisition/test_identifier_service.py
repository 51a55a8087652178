from __future__ import annotations

import io

import pytest
import qrcode
from PIL import Image

from src.attendance_relay.attendance_relay.acquisition.service import IdentifierService, decode_qr_image
from src.attendance_relay.attendance_relay.core.exceptions import ValidationError


def _qr_png(text: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=4,
    )
    qr.add_data(text)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def _blank_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (120, 120), "white").save(buf, format="PNG")
    return buf.getvalue()


def test_manual_entry_is_trimmed():
    svc = IdentifierService()

    assert svc.set_manual("  6891b2c5_6891b313 \n") == "6891b2c5_6891b313"
    assert svc.current == "6891b2c5_6891b313"


def test_blank_manual_entry_clears():
    svc = IdentifierService("abc")

    svc.set_manual("   ")

    assert svc.current == ""


def test_decode_qr_image_reads_generated_code():
    assert decode_qr_image(_qr_png("6891b2c5c9f44ea403d7d206_6891b3133ad5d54c2e27e050")) == (
        "6891b2c5c9f44ea403d7d206_6891b3133ad5d54c2e27e050"
    )


def test_set_from_image_updates_current():
    svc = IdentifierService()

    svc.set_from_image(_qr_png("ATT-12345"))

    assert svc.current == "ATT-12345"


def test_image_without_code_is_rejected_and_keeps_current():
    svc = IdentifierService("previous")

    with pytest.raises(ValidationError):
        svc.set_from_image(_blank_png())

    assert svc.current == "previous"


@pytest.mark.parametrize("payload", [b"", b"definitely not an image"])
def test_unreadable_upload_is_rejected(payload):
    with pytest.raises(ValidationError):
        IdentifierService().set_from_image(payload)
