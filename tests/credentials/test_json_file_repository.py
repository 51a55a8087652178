from __future__ import annotations

from src.attendance_relay.attendance_relay.credentials.json_file_repository import JsonFileBlobRepository
from src.attendance_relay.attendance_relay.credentials.service import CredentialStore


def test_missing_key_reads_as_none(tmp_path):
    repo = JsonFileBlobRepository(tmp_path / "store")

    assert repo.read_blob("attendance_users_v1") is None


def test_write_then_read_back(tmp_path):
    repo = JsonFileBlobRepository(tmp_path / "store")

    repo.write_blob("attendance_users_v1", "[]")
    repo.write_blob("attendance_users_v1", '[{"id": "1"}]')

    assert repo.read_blob("attendance_users_v1") == '[{"id": "1"}]'
    assert sorted(p.name for p in (tmp_path / "store").iterdir()) == ["attendance_users_v1.json"]


def test_store_survives_a_restart(tmp_path):
    store = CredentialStore(JsonFileBlobRepository(tmp_path))
    store.quick_add("s%3Aabc.def", display_name="Alice")
    store.quick_add("s%3Aghi.jkl")

    restarted = CredentialStore(JsonFileBlobRepository(tmp_path))
    restarted.hydrate()

    assert [r.display_name for r in restarted.list_records()] == ["Alice", "User 2"]
    assert restarted.list_records() == store.list_records()
