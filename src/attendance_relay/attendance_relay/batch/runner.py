from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable, Iterator, Optional, Sequence

from ..acquisition.service import IdentifierService
from ..common.datetime_utils import now_local
from ..common.validators import token_preview
from ..core.constants import AUTO_EXECUTE_MIN_IDENTIFIER_LENGTH, DEFAULT_PACING_DELAY_SECONDS
from ..core.enums import LogStatus, RunnerState
from ..core.exceptions import NoTargetIdentifierError, SubmissionError
from ..credentials.model import CredentialRecord
from ..credentials.service import CredentialStore
from ..logs.sink import LogSink
from ..submission.client import describe_outcome
from .events import BatchEvent, BatchSummary, LogAppended, RecordStamped

logger = logging.getLogger(__name__)

SubmitFn = Callable[[str, str], Any]


def iter_batch_events(
    records: Sequence[CredentialRecord],
    target_identifier: str,
    submit: SubmitFn,
    *,
    pacing_seconds: float = DEFAULT_PACING_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], datetime] = now_local,
) -> Iterator[BatchEvent]:
    """Walk the records in order and describe what happened to each.

    Nothing is mutated here; the caller applies the events. A failed
    submission becomes a ``failed`` log event and the walk carries on.
    """
    for record in records:
        yield LogAppended(
            subject_name=record.display_name,
            target_identifier=target_identifier,
            status=LogStatus.PENDING,
            message=f"Marking attendance for {record.display_name} (SID: {token_preview(record.session_token)})",
        )

        try:
            if pacing_seconds > 0:
                sleep(pacing_seconds)
            payload = submit(target_identifier, record.session_token)
        except Exception as e:
            if not isinstance(e, SubmissionError):
                logger.exception("Unexpected error submitting for %s", record.display_name)
            yield LogAppended(
                subject_name=record.display_name,
                target_identifier=target_identifier,
                status=LogStatus.FAILED,
                message=str(e) or "Request failed",
            )
            continue

        code = describe_outcome(payload)
        message = "Attendance marked successfully"
        if code:
            message = f"{message} ({code})"

        yield LogAppended(
            subject_name=record.display_name,
            target_identifier=target_identifier,
            status=LogStatus.SUCCESS,
            message=message,
        )
        yield RecordStamped(record_id=record.record_id, when=clock())


class BatchRunner:
    """Drives one submission per stored credential, one at a time.

    At most one run is in flight; a second trigger while running is refused.
    """

    def __init__(
        self,
        store: CredentialStore,
        sink: LogSink,
        submit: SubmitFn,
        identifiers: IdentifierService,
        *,
        pacing_seconds: float = DEFAULT_PACING_DELAY_SECONDS,
        auto_execute: bool = False,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._sink = sink
        self._submit = submit
        self._identifiers = identifiers
        self._pacing_seconds = float(pacing_seconds)
        self._auto_execute = bool(auto_execute)
        self._sleep = sleep
        self._clock = clock
        self._guard = threading.Lock()
        self._state = RunnerState.IDLE
        self._last_summary: Optional[BatchSummary] = None

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == RunnerState.RUNNING

    @property
    def auto_execute(self) -> bool:
        return self._auto_execute

    @auto_execute.setter
    def auto_execute(self, enabled: bool) -> None:
        self._auto_execute = bool(enabled)

    @property
    def pacing_seconds(self) -> float:
        return self._pacing_seconds

    @property
    def last_summary(self) -> Optional[BatchSummary]:
        return self._last_summary

    def _require_target(self) -> str:
        target = self._identifiers.current.strip()
        if not target:
            raise NoTargetIdentifierError("No attendance ID set")
        return target

    def _apply(self, event: BatchEvent) -> None:
        if isinstance(event, LogAppended):
            self._sink.append(
                subject_name=event.subject_name,
                target_identifier=event.target_identifier,
                status=event.status,
                message=event.message,
            )
        elif isinstance(event, RecordStamped):
            self._store.stamp_last_used(event.record_id, event.when)

    def _try_claim(self) -> bool:
        if not self._guard.acquire(blocking=False):
            logger.info("Batch already running; ignoring trigger")
            return False
        self._state = RunnerState.RUNNING
        return True

    def _release(self) -> None:
        self._state = RunnerState.IDLE
        self._guard.release()

    def run(self) -> Optional[BatchSummary]:
        """Run one batch for the current identifier.

        Returns None without doing anything when a run is already in flight.
        Raises NoTargetIdentifierError before touching anything when no
        identifier is set.
        """
        target = self._require_target()
        if not self._try_claim():
            return None
        return self._run_claimed(target)

    def _run_claimed(self, target: str) -> BatchSummary:
        try:
            records = self._store.list_records()
            logger.info("Batch started for %s over %d credential(s)", target, len(records))

            succeeded = failed = 0
            for event in iter_batch_events(
                records,
                target,
                self._submit,
                pacing_seconds=self._pacing_seconds,
                sleep=self._sleep,
                clock=self._clock,
            ):
                self._apply(event)
                if isinstance(event, LogAppended):
                    if event.status == LogStatus.SUCCESS:
                        succeeded += 1
                    elif event.status == LogStatus.FAILED:
                        failed += 1

            summary = BatchSummary(
                target_identifier=target,
                attempted=len(records),
                succeeded=succeeded,
                failed=failed,
            )
            self._last_summary = summary
            logger.info("Batch finished for %s: %d ok, %d failed", target, succeeded, failed)
        finally:
            self._release()

        if self._auto_execute:
            self._identifiers.clear()
        return summary

    def start_in_background(self) -> bool:
        """Dispatch a run on a daemon thread. False when a run is already in flight.

        The run is claimed before the thread starts, so two quick triggers
        never both get through.
        """
        target = self._require_target()
        if not self._try_claim():
            return False

        thread = threading.Thread(
            target=self._run_in_thread,
            args=(target,),
            name="attendance-batch",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError:
            self._release()
            raise
        return True

    def _run_in_thread(self, target: str) -> None:
        try:
            self._run_claimed(target)
        except Exception:
            logger.exception("Background batch crashed")

    def should_auto_execute(self) -> bool:
        return (
            self._auto_execute
            and len(self._identifiers.current) >= AUTO_EXECUTE_MIN_IDENTIFIER_LENGTH
            and not self.is_running
            and len(self._store) > 0
        )

    def maybe_auto_execute(self, *, background: bool = True) -> bool:
        """Kick off a run when auto-execute is on and a fresh identifier is waiting."""
        if not self.should_auto_execute():
            return False
        if background:
            return self.start_in_background()
        return self.run() is not None
