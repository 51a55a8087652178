from __future__ import annotations

import logging

from src.attendance_relay.attendance_relay.core.logger import TokenRedactionFilter

TOKEN = "s%3AfxqdOtLUAxGWtTTn3hm973NyBZ3AbXQf.vO14QJttu442cjczWy35isRV2ehus4bwPZDCOUSShJM"
PREVIEW = "s%3Afxqd..."


def _record(msg, *args):
    return logging.LogRecord("attendance_relay.test", logging.INFO, __file__, 1, msg, args or None, None)


def _filtered(record):
    assert TokenRedactionFilter().filter(record) is True
    return record.getMessage()


def test_cookie_header_value_is_masked():
    text = _filtered(_record(f"Cookie: connect.sid={TOKEN}; Path=/"))

    assert TOKEN not in text
    assert text == f"Cookie: connect.sid={PREVIEW}; Path=/"


def test_bare_signed_sid_is_masked():
    text = _filtered(_record(f"stored session {TOKEN} for User 1"))

    assert TOKEN not in text
    assert text == f"stored session {PREVIEW} for User 1"


def test_tokens_passed_as_args_are_masked():
    record = _record("header=%s raw=%s", f"connect.sid={TOKEN}", TOKEN)

    text = _filtered(record)

    assert TOKEN not in text
    assert text == f"header=connect.sid={PREVIEW} raw={PREVIEW}"
    assert record.args is None


def test_already_previewed_token_is_left_alone():
    text = _filtered(_record("POST attendanceId=%s sid=%s", "att", PREVIEW))

    assert text == f"POST attendanceId=att sid={PREVIEW}"


def test_non_string_messages_pass_through():
    payload = {"connectSid": TOKEN}
    record = _record(payload)

    assert TokenRedactionFilter().filter(record) is True
    assert record.msg is payload
