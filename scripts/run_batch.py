"""Run one attendance batch from the command line.

Usage: python scripts/run_batch.py <attendanceId>
Uses the same settings (APP_ENV, .env) and credential storage as the web app.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.attendance_relay.attendance_relay.container import build_container
from src.attendance_relay.attendance_relay.core.exceptions import NoTargetIdentifierError
from src.attendance_relay.attendance_relay.core.logger import setup_logger


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mark attendance for every stored session")
    parser.add_argument("attendance_id", help="attendance identifier (QR payload)")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = load_settings()
    setup_logger(str(settings.get("LOG_LEVEL", "INFO")))

    container = build_container(settings=settings)
    container.identifier_service.set_manual(args.attendance_id)
    try:
        summary = container.batch_runner.run()
    except NoTargetIdentifierError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for entry in reversed(container.log_sink.entries()):
        print(f"[{entry.status.value:>7}] {entry.subject_name}: {entry.message}")
    print(f"Done: {summary.succeeded} ok, {summary.failed} failed of {summary.attempted}")
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
