"""Example: drive the service layer without Flask.

Imports two sessions, then prints what a dry batch would log. The submit
function here is a stand-in that never contacts the ERP.
"""

from __future__ import annotations

import json
import tempfile

from src.attendance_relay.attendance_relay.container import build_container
from src.attendance_relay.attendance_relay.credentials.json_file_repository import JsonFileBlobRepository


def dry_submit(target_identifier: str, session_token: str) -> dict:
    return {"output": {"data": {"code": "SUCCESS"}, "errors": None}}


def main():
    settings = {"PACING_DELAY_SECONDS": 0.2, "LOG_CAPACITY": 20}
    repo = JsonFileBlobRepository(tempfile.mkdtemp(prefix="attendance-relay-example-"))
    container = build_container(settings=settings, blob_repo=repo, submit=dry_submit)

    container.credential_store.bulk_import(
        json.dumps([{"name": "Alice", "connectSid": "s%3Aalice.sig"}, {"connect_sid": "s%3Abob.sig"}])
    )
    container.identifier_service.set_manual("6891b2c5c9f44ea403d7d206_6891b3133ad5d54c2e27e050")

    summary = container.batch_runner.run()
    for entry in reversed(container.log_sink.entries()):
        print(f"{entry.timestamp:%H:%M:%S} [{entry.status.value}] {entry.subject_name}: {entry.message}")
    print(summary)


if __name__ == "__main__":
    main()
