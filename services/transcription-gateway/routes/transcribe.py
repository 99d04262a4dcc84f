"""Transcription submission, status and download endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from transcipio_common.logging import setup_logging

from config import AppConfig
from dependencies import get_config, get_transcription_service
from domain import TranscriptFormat, TranscriptionJob, TranscriptStatus, validate_media_url
from domain import transcript_formatter
from exceptions import InvalidMediaUrlError, MisconfiguredServerError, TranscriptionError
from infrastructure.interfaces import TranscriptionService
from response_models import TranscribeRequest
from security import guarded

logger = setup_logging()

router = APIRouter(prefix="/transcribe", tags=["transcribe"], dependencies=guarded)

ConfigDep = Annotated[AppConfig, Depends(get_config)]
TranscriptionDep = Annotated[TranscriptionService, Depends(get_transcription_service)]


def _fetch(service: TranscriptionService, job_id: str) -> TranscriptionJob:
    try:
        return service.get_job(job_id)
    except MisconfiguredServerError:
        raise HTTPException(status_code=500, detail="Server misconfigured")
    except TranscriptionError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("", response_model=TranscriptionJob)
def submit_transcription(
    body: TranscribeRequest,
    service: TranscriptionDep,
    config: ConfigDep,
) -> TranscriptionJob:
    """Submits a media URL for transcription and returns the queued job."""
    try:
        media_url = validate_media_url(body.audio_url)
    except InvalidMediaUrlError as e:
        raise HTTPException(status_code=400, detail=str(e))

    language_code = body.language_code or config.assemblyai.default_language_code

    try:
        return service.submit(media_url, language_code)
    except MisconfiguredServerError:
        logger.error("Transcription requested without a provider key")
        raise HTTPException(status_code=500, detail="Server misconfigured")
    except TranscriptionError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("", response_model=TranscriptionJob)
def get_transcription(
    service: TranscriptionDep,
    job_id: Annotated[str | None, Query(alias="id")] = None,
) -> TranscriptionJob:
    """Returns the provider's current view of a transcription job."""
    if not job_id:
        raise HTTPException(status_code=400, detail="Missing id")
    return _fetch(service, job_id)


@router.get("/{job_id}/download")
def download_transcript(
    job_id: str,
    service: TranscriptionDep,
    fmt: Annotated[TranscriptFormat, Query(alias="format")] = TranscriptFormat.txt,
) -> Response:
    """Downloads a completed transcript as txt, paragraphs, srt or json."""
    job = _fetch(service, job_id)
    if job.status != TranscriptStatus.completed:
        raise HTTPException(
            status_code=409,
            detail=f"Transcript is {job.status.value}, not completed",
        )

    content = transcript_formatter.render(job, fmt)
    filename = transcript_formatter.filename_for(fmt)
    return Response(
        content=content,
        media_type=transcript_formatter.media_type_for(fmt),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
