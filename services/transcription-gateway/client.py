"""HTTP client that drives the upload, transcribe and poll flow against the gateway."""

import threading
from pathlib import Path
from typing import BinaryIO

import httpx
from transcipio_common.logging import setup_logging

from config import PollingConfig, load_config
from domain import TranscriptFormat, TranscriptionJob, TranscriptionPoller
from domain import transcript_formatter
from exceptions import GatewayError
from response_models import UploadedFile

logger = setup_logging()


class GatewayClient:
    """
    Calls the gateway endpoints with the private API key attached.

    Polling cadence and deadline come from ``polling``, which defaults to the
    ``POLL_INTERVAL_SECONDS`` and ``POLL_TIMEOUT_SECONDS`` environment settings.
    """

    def __init__(self, http: httpx.Client, api_key: str, polling: PollingConfig | None = None):
        self._http = http
        self._headers = {"x-api-key": api_key}
        self._polling = polling or load_config().polling

    def close(self) -> None:
        self._http.close()

    def upload(self, data: BinaryIO, filename: str, content_type: str) -> UploadedFile:
        body = self._request(
            "POST", "/upload", files={"file": (filename, data, content_type)}
        )
        return UploadedFile.model_validate(body["file"])

    def submit(self, media_url: str, language_code: str) -> TranscriptionJob:
        body = self._request(
            "POST",
            "/transcribe",
            json={"audio_url": media_url, "language_code": language_code},
        )
        return TranscriptionJob.model_validate(body)

    def get_job(self, job_id: str) -> TranscriptionJob:
        body = self._request("GET", "/transcribe", params={"id": job_id})
        return TranscriptionJob.model_validate(body)

    def transcribe_file(
        self,
        path: Path,
        content_type: str,
        language_code: str = "en",
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionJob:
        """
        Uploads a local file, submits it and polls until the transcript is ready.

        Storage always completes before the transcription is submitted, since
        the submission needs the URL the upload returns.

        Raises:
            GatewayError: If any gateway call fails.
            TranscriptionFailedError: If the provider reports an error.
            PollingTimeoutError: If the polling deadline elapses first.
            PollingCancelledError: If ``cancel_event`` is set.
        """
        with path.open("rb") as data:
            uploaded = self.upload(data, path.name, content_type)
        logger.info("Media uploaded", extra={"name": uploaded.name, "url": uploaded.url})

        job = self.submit(uploaded.url, language_code)
        logger.info("Transcription submitted", extra={"job_id": job.id})

        poller = TranscriptionPoller(
            self.get_job,
            interval_seconds=self._polling.interval_seconds,
            timeout_seconds=self._polling.timeout_seconds,
        )
        return poller.wait(job.id, cancel_event=cancel_event)

    @staticmethod
    def save_transcript(job: TranscriptionJob, fmt: TranscriptFormat, directory: Path) -> Path:
        """Writes ``job`` rendered as ``fmt`` into ``directory``."""
        target = directory / transcript_formatter.filename_for(fmt)
        target.write_text(transcript_formatter.render(job, fmt), encoding="utf-8")
        return target

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = self._http.request(method, url, headers=self._headers, **kwargs)
        except httpx.HTTPError as e:
            logger.exception("Gateway request failed", extra={"method": method, "url": url})
            raise GatewayError(None, str(e) or type(e).__name__, e) from e

        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
        raise GatewayError(response.status_code, str(detail))
