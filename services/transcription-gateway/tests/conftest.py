import os

# Settings are read once when the app modules are imported.
os.environ["PRIVATE_API_KEY"] = "test-key"
os.environ["ASSEMBLYAI_API_KEY"] = ""
os.environ["STORAGE_BACKEND"] = "http"
os.environ["STORAGE_UPLOAD_URL"] = "https://storage.test/upload"
os.environ["RATE_LIMIT_BACKEND"] = "memory"

import pytest
from httpx import ASGITransport, AsyncClient

from dependencies import get_rate_limiter, get_transcription_service, get_upload_handler
from domain import TranscriptionJob, TranscriptStatus, TranscriptWord, UploadValidator
from exceptions import StorageUploadError
from handlers import UploadHandler
from infrastructure import InMemoryRateLimiter
from infrastructure.interfaces import StorageClient, TranscriptionService
from main import app

MAX_TEST_BYTES = 1024


class FakeStorage(StorageClient):
    """Records uploads and hands back a predictable URL."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: list[dict] = []

    def upload(self, object_name, data, size, content_type):
        if self.fail:
            raise StorageUploadError(object_name, Exception("boom"))
        self.uploads.append(
            {
                "object_name": object_name,
                "data": data.read(),
                "size": size,
                "content_type": content_type,
            }
        )
        return f"https://cdn.test/{object_name}"


class FakeTranscriptionService(TranscriptionService):
    """Serves jobs from a dict keyed by id."""

    def __init__(self, jobs: dict[str, TranscriptionJob] | None = None):
        self.jobs = jobs or {}
        self.submitted: list[tuple[str, str]] = []

    def submit(self, media_url, language_code):
        self.submitted.append((media_url, language_code))
        job = TranscriptionJob(
            id="job-1",
            status=TranscriptStatus.queued,
            audio_url=media_url,
            language_code=language_code,
        )
        self.jobs[job.id] = job
        return job

    def get_job(self, job_id):
        return self.jobs[job_id]


@pytest.fixture()
def completed_job() -> TranscriptionJob:
    return TranscriptionJob(
        id="job-1",
        status=TranscriptStatus.completed,
        audio_url="https://cdn.test/uploads/clip.mp4",
        language_code="en",
        text="hello there general kenobi",
        words=(
            TranscriptWord(text="hello", start=0, end=500, confidence=0.98),
            TranscriptWord(text="there", start=500, end=1000, confidence=0.97),
            TranscriptWord(text="general", start=1000, end=1500, confidence=0.95),
            TranscriptWord(text="kenobi", start=1500, end=2000, confidence=0.91),
        ),
    )


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def transcription_service() -> FakeTranscriptionService:
    return FakeTranscriptionService()


@pytest.fixture()
def rate_limiter() -> InMemoryRateLimiter:
    return InMemoryRateLimiter(window_seconds=60, max_requests=100)


@pytest.fixture()
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture()
def api(storage, transcription_service, rate_limiter, upload_dir):
    """The app with fake collaborators wired in."""
    validator = UploadValidator(("audio/", "video/"), MAX_TEST_BYTES)
    app.dependency_overrides[get_upload_handler] = lambda: UploadHandler(
        validator, storage, tmp_dir=upload_dir
    )
    app.dependency_overrides[get_transcription_service] = lambda: transcription_service
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(api):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as c:
        yield c
