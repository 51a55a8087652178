from __future__ import annotations

import json

from src.attendance_relay.attendance_relay.credentials.importer import parse_bulk_payload


def test_name_and_id_are_synthesized_when_absent():
    records = parse_bulk_payload(json.dumps([{"connect.sid": "aaa"}, {"connectSid": "bbb", "id": "keep-me"}]), first_position=4)

    assert records[0].display_name == "User 4"
    assert records[0].record_id
    assert records[1].display_name == "User 5"
    assert records[1].record_id == "keep-me"


def test_secondary_identifier_aliases():
    payload = [
        {"connectSid": "a", "StuId": "one"},
        {"connectSid": "b", "CmStuId": "two"},
        {"connectSid": "c", "stu_id": "three"},
        {"connectSid": "d"},
    ]

    records = parse_bulk_payload(json.dumps(payload))

    assert [r.secondary_identifier for r in records] == ["one", "two", "three", None]


def test_camel_case_token_wins_over_snake_case():
    records = parse_bulk_payload(json.dumps([{"connectSid": "camel", "connect_sid": "snake"}]))

    assert records[0].session_token == "camel"
