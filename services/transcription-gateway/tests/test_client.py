import json
import threading

import httpx
import pytest

from client import GatewayClient
from config import PollingConfig
from domain import TranscriptFormat
from exceptions import (
    GatewayError,
    PollingCancelledError,
    PollingTimeoutError,
    TranscriptionFailedError,
)

FAST_POLLING = PollingConfig(interval_seconds=0, timeout_seconds=None)


class FakeGateway:
    """Stands in for the gateway: upload, submit, then a scripted status sequence."""

    def __init__(self, statuses: list[dict]):
        self.statuses = statuses
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        assert request.headers["x-api-key"] == "secret"
        route = f"{request.method} {request.url.path}"
        self.calls.append(route)

        if route == "POST /upload":
            return httpx.Response(
                200,
                json={
                    "status": "success",
                    "message": "File accepted and processed",
                    "file": {
                        "name": "1_abc_clip.mp4",
                        "size": 5,
                        "mime": "video/mp4",
                        "storageKey": "uploads/1_abc_clip.mp4",
                        "url": "https://cdn.test/clip.mp4",
                    },
                },
            )
        if route == "POST /transcribe":
            body = json.loads(request.content)
            assert body == {"audio_url": "https://cdn.test/clip.mp4", "language_code": "es"}
            return httpx.Response(200, json={"id": "job-1", "status": "queued"})
        if route == "GET /transcribe":
            assert request.url.params["id"] == "job-1"
            return httpx.Response(200, json=self.statuses.pop(0))
        return httpx.Response(404, json={"detail": "Not Found"})


def _client(gateway, polling: PollingConfig | None = FAST_POLLING) -> GatewayClient:
    http = httpx.Client(base_url="http://gateway.test", transport=httpx.MockTransport(gateway))
    return GatewayClient(http, api_key="secret", polling=polling)


@pytest.fixture()
def media(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"video")
    return path


class TestGatewayClient:
    def test_transcribe_file_uploads_submits_and_polls(self, media):
        gateway = FakeGateway(
            [
                {"id": "job-1", "status": "processing"},
                {
                    "id": "job-1",
                    "status": "completed",
                    "text": "hola",
                    "words": [{"text": "hola", "start": 0, "end": 400}],
                },
            ]
        )

        job = _client(gateway).transcribe_file(media, "video/mp4", language_code="es")

        assert job.text == "hola"
        assert gateway.calls == [
            "POST /upload",
            "POST /transcribe",
            "GET /transcribe",
            "GET /transcribe",
        ]

    def test_provider_error_stops_polling(self, media):
        gateway = FakeGateway(
            [
                {"id": "job-1", "status": "error", "error": "File does not appear to contain audio"},
                {"id": "job-1", "status": "completed"},
            ]
        )

        with pytest.raises(TranscriptionFailedError, match="does not appear to contain audio"):
            _client(gateway).transcribe_file(media, "video/mp4", language_code="es")

        assert gateway.calls.count("GET /transcribe") == 1

    def test_cancel_before_first_poll(self, media):
        cancel = threading.Event()
        cancel.set()
        gateway = FakeGateway([])

        with pytest.raises(PollingCancelledError):
            _client(gateway).transcribe_file(
                media, "video/mp4", language_code="es", cancel_event=cancel
            )

        assert "GET /transcribe" not in gateway.calls

    def test_gateway_error_carries_status_and_detail(self):
        def handler(request):
            return httpx.Response(429, json={"detail": "Too many requests"})

        with pytest.raises(GatewayError) as exc_info:
            _client(handler).get_job("job-1")

        assert exc_info.value.status_code == 429
        assert exc_info.value.detail == "Too many requests"

    def test_gateway_error_with_non_json_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(GatewayError) as exc_info:
            _client(handler).get_job("job-1")

        assert exc_info.value.detail == "Bad Gateway"

    def test_gateway_error_with_non_object_json_body(self):
        def handler(request):
            return httpx.Response(500, json=["boom"])

        with pytest.raises(GatewayError) as exc_info:
            _client(handler).get_job("job-1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == '["boom"]'

    def test_transport_failure_becomes_gateway_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayError) as exc_info:
            _client(handler).get_job("job-1")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_polling_deadline_comes_from_environment(self, media, monkeypatch):
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0")
        monkeypatch.setenv("POLL_TIMEOUT_SECONDS", "0")
        gateway = FakeGateway([{"id": "job-1", "status": "processing"}])

        with pytest.raises(PollingTimeoutError):
            _client(gateway, polling=None).transcribe_file(media, "video/mp4", language_code="es")

        assert gateway.calls.count("GET /transcribe") == 1

    def test_default_polling_has_a_deadline(self, monkeypatch):
        monkeypatch.delenv("POLL_TIMEOUT_SECONDS", raising=False)

        client = _client(FakeGateway([]), polling=None)

        assert client._polling.timeout_seconds == 1800.0

    def test_save_transcript_writes_rendered_file(self, tmp_path):
        gateway = FakeGateway(
            [
                {
                    "id": "job-1",
                    "status": "completed",
                    "text": "hola",
                    "words": [{"text": "hola", "start": 1234, "end": 2500}],
                }
            ]
        )
        job = _client(gateway).get_job("job-1")

        path = GatewayClient.save_transcript(job, TranscriptFormat.srt, tmp_path)

        assert path.name == "transcript.srt"
        assert path.read_text() == "1\n00:00:01,234 --> 00:00:02,500\nhola\n\n"
