from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta

import pytest

from src.attendance_relay.attendance_relay.core.enums import LogStatus
from src.attendance_relay.attendance_relay.logs.sink import LogSink


class TickingClock:
    def __init__(self):
        self._now = datetime(2026, 3, 2, 8, 0, 0)

    def __call__(self):
        self._now += timedelta(seconds=1)
        return self._now


def _append(sink, n):
    return sink.append(subject_name=f"User {n}", target_identifier="att", status=LogStatus.PENDING, message=f"entry {n}")


def test_entries_are_newest_first():
    sink = LogSink(clock=TickingClock())
    for n in range(3):
        _append(sink, n)

    assert [e.message for e in sink.entries()] == ["entry 2", "entry 1", "entry 0"]


def test_log_is_capped_at_100_and_evicts_oldest():
    sink = LogSink()
    for n in range(101):
        _append(sink, n)

    entries = sink.entries()
    assert len(entries) == 100
    assert entries[0].message == "entry 100"
    assert entries[-1].message == "entry 1"
    assert [e.message for e in entries] == [f"entry {n}" for n in range(100, 0, -1)]


def test_entries_get_unique_ids_and_timestamps():
    sink = LogSink(clock=TickingClock())
    a = _append(sink, 1)
    b = _append(sink, 2)

    assert a.entry_id != b.entry_id
    assert b.timestamp > a.timestamp


def test_entries_are_immutable():
    sink = LogSink()
    entry = _append(sink, 1)

    with pytest.raises(AttributeError):
        entry.status = LogStatus.SUCCESS


def test_custom_capacity_and_clear():
    sink = LogSink(capacity=2)
    for n in range(5):
        _append(sink, n)

    assert len(sink) == 2
    sink.clear()
    assert sink.entries() == []


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        LogSink(capacity=0)


def test_export_csv():
    sink = LogSink(clock=TickingClock())
    sink.append(subject_name="Alice", target_identifier="att-1", status=LogStatus.SUCCESS, message="Attendance marked successfully")

    text = sink.export_csv().decode("utf-8-sig")
    rows = list(csv.DictReader(io.StringIO(text)))

    assert rows == [
        {
            "timestamp": "2026-03-02T08:00:01.000",
            "userName": "Alice",
            "attendanceId": "att-1",
            "status": "success",
            "message": "Attendance marked successfully",
        }
    ]
