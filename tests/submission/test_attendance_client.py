from __future__ import annotations

import logging

import pytest
import requests

from src.attendance_relay.attendance_relay.core.exceptions import RemoteRejectionError, TransportError
from src.attendance_relay.attendance_relay.submission.client import AttendanceClient, ErpEndpoint, describe_outcome
from src.attendance_relay.attendance_relay.submission.client import logger as client_logger

TOKEN = "s%3AfxqdOtLUAxGWtTTn3hm973NyBZ3AbXQf.vO14QJttu442cjczWy35isRV2ehus4bwPZDCOUSShJM"


class FakeResponse:
    def __init__(self, status_code=200, json_body=None, text="", text_error=None):
        self.status_code = status_code
        self._json_body = json_body
        self._text = text
        self._text_error = text_error

    @property
    def text(self):
        if self._text_error:
            raise self._text_error
        return self._text

    def json(self):
        if self._json_body is None:
            raise ValueError("no json")
        return self._json_body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, **kwargs):
        self.calls.append({"url": url, "json": json, "headers": headers, "kwargs": kwargs})
        if self.error:
            raise self.error
        return self.response


def _client(session):
    return AttendanceClient(
        ErpEndpoint(url="https://erp.example/api/Attendance/record-online-attendance", origin="https://erp.example", referer="https://erp.example/v2/timetable", user_agent="UA"),
        session=session,
    )


def test_submit_builds_post_with_cookie_and_body():
    body = {"output": {"data": {"code": "SUCCESS"}}}
    session = FakeSession(FakeResponse(200, json_body=body))

    result = _client(session).submit("6891b2c5_6891b313", TOKEN)

    assert result == body
    call = session.calls[0]
    assert call["url"] == "https://erp.example/api/Attendance/record-online-attendance"
    assert call["json"] == {"attendanceId": "6891b2c5_6891b313"}
    assert call["headers"]["Cookie"] == f"connect.sid={TOKEN}"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["Origin"] == "https://erp.example"
    assert call["headers"]["Referer"] == "https://erp.example/v2/timetable"
    assert call["headers"]["User-Agent"] == "UA"
    assert "timeout" not in call["kwargs"]


def test_non_json_success_body_is_returned_as_text():
    session = FakeSession(FakeResponse(201, text="OK"))

    assert _client(session).submit("att", TOKEN) == "OK"


def test_non_success_status_raises_rejection_with_body():
    session = FakeSession(FakeResponse(401, text="Unauthorized"))

    with pytest.raises(RemoteRejectionError) as exc:
        _client(session).submit("att", TOKEN)

    assert exc.value.status_code == 401
    assert exc.value.body == "Unauthorized"
    assert "401" in str(exc.value)


def test_unreadable_rejection_body_degrades_to_empty():
    session = FakeSession(FakeResponse(500, text_error=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad")))

    with pytest.raises(RemoteRejectionError) as exc:
        _client(session).submit("att", TOKEN)

    assert exc.value.status_code == 500
    assert exc.value.body == ""


def test_transport_failure_raises_transport_error():
    session = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(TransportError) as exc:
        _client(session).submit("att", TOKEN)

    assert "connection refused" in str(exc.value)


def test_header_encoding_failure_raises_transport_error(caplog):
    token = "s%3Aabc…def"
    session = FakeSession(error=UnicodeEncodeError("latin-1", f"connect.sid={token}", 19, 20, "ordinal not in range(256)"))

    with caplog.at_level(logging.DEBUG, logger=client_logger.name):
        with pytest.raises(TransportError) as exc:
            _client(session).submit("att", token)

    assert "UnicodeEncodeError" in str(exc.value)
    assert isinstance(exc.value.__cause__, UnicodeEncodeError)
    assert token not in caplog.text


def test_full_token_is_never_logged(caplog):
    session = FakeSession(FakeResponse(200, json_body={}))

    with caplog.at_level(logging.DEBUG, logger=client_logger.name):
        _client(session).submit("att", TOKEN)

    assert caplog.records
    assert TOKEN not in caplog.text
    assert TOKEN[:8] in caplog.text


@pytest.mark.parametrize(
    "payload,expected",
    [
        ({"output": {"data": {"code": "SUCCESS"}, "errors": None}}, "SUCCESS"),
        ({"output": {"data": None, "errors": {"code": "INVLD_QR"}}}, None),
        ({"output": {"data": {"code": "SUCCESS"}, "errors": {"code": "INVLD_QR"}}}, "SUCCESS"),
        ({"output": {}}, None),
        ("plain text", None),
        (None, None),
    ],
)
def test_describe_outcome(payload, expected):
    assert describe_outcome(payload) == expected
