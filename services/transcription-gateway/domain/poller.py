"""Polls a transcription job until the provider reports a terminal status."""

import threading
import time
from collections.abc import Callable
from enum import Enum

from transcipio_common.logging import setup_logging

from exceptions import (
    PollingCancelledError,
    PollingTimeoutError,
    TranscriptionFailedError,
)

from .models import TranscriptionJob, TranscriptStatus

logger = setup_logging()


class PollState(str, Enum):
    submitted = "submitted"
    polling = "polling"
    completed = "completed"
    failed = "failed"


class TranscriptionPoller:
    """
    Fixed-interval poller for a single transcription job.

    The poller starts in ``submitted``, moves to ``polling`` on the first
    wait, and ends in ``completed`` or ``failed``. A ``timeout_seconds`` of
    None polls until the provider reports a terminal status.
    """

    def __init__(
        self,
        fetch_job: Callable[[str], TranscriptionJob],
        interval_seconds: float = 3.0,
        timeout_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch_job = fetch_job
        self._interval_seconds = interval_seconds
        self._timeout_seconds = timeout_seconds
        self._clock = clock
        self._state = PollState.submitted
        self._attempts = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def attempts(self) -> int:
        return self._attempts

    def wait(
        self, job_id: str, cancel_event: threading.Event | None = None
    ) -> TranscriptionJob:
        """
        Blocks until the job completes.

        Args:
            job_id: Provider-issued transcript identifier.
            cancel_event: Set it from another thread to stop polling.

        Returns:
            The completed TranscriptionJob.

        Raises:
            TranscriptionFailedError: If the provider reports ``error``.
            PollingTimeoutError: If the deadline passes first.
            PollingCancelledError: If ``cancel_event`` is set.
        """
        cancel_event = cancel_event or threading.Event()
        deadline = (
            self._clock() + self._timeout_seconds
            if self._timeout_seconds is not None
            else None
        )
        self._state = PollState.polling

        while True:
            if cancel_event.wait(self._interval_seconds):
                self._state = PollState.failed
                raise PollingCancelledError(job_id)

            job = self._fetch_job(job_id)
            self._attempts += 1

            if job.status == TranscriptStatus.completed:
                self._state = PollState.completed
                logger.info(
                    "Transcript completed",
                    extra={"job_id": job_id, "attempts": self._attempts},
                )
                return job

            if job.status == TranscriptStatus.error:
                self._state = PollState.failed
                logger.warning(
                    "Transcript failed",
                    extra={"job_id": job_id, "error": job.error},
                )
                raise TranscriptionFailedError(job_id, job.error)

            if deadline is not None and self._clock() >= deadline:
                self._state = PollState.failed
                raise PollingTimeoutError(job_id, self._timeout_seconds)
