"""AssemblyAI implementation of the TranscriptionService interface."""

from collections.abc import Callable

import assemblyai as aai
from assemblyai.prerecorded.v2 import api as transcript_api
from transcipio_common.logging import setup_logging

from domain.models import TranscriptionJob, TranscriptStatus, TranscriptWord
from exceptions import MisconfiguredServerError, TranscriptionError

from .interfaces import TranscriptionService

logger = setup_logging()


def fetch_current_transcript(job_id: str) -> aai.Transcript:
    """
    Reads the transcript once and returns it in whatever state it is in.

    Unlike ``aai.Transcript.get_by_id``, this does not wait for completion.
    """
    client = aai.Client.get_default()
    response = transcript_api.get_transcript(client.http_client, job_id)
    return aai.Transcript.from_response(client=client, response=response)


class AssemblyAITranscriber(TranscriptionService):
    """Submits and looks up transcripts through the AssemblyAI SDK."""

    def __init__(
        self,
        transcriber: aai.Transcriber | None,
        api_key: str,
        fetch_transcript: Callable[[str], aai.Transcript] = fetch_current_transcript,
    ):
        self._transcriber = transcriber
        self._api_key = api_key
        self._fetch_transcript = fetch_transcript

    def submit(self, media_url: str, language_code: str) -> TranscriptionJob:
        """
        Queues a transcript without waiting for it to finish.

        The SDK's ``submit`` returns as soon as the job is accepted, so the
        caller is responsible for polling ``get_job``.
        """
        self._require_api_key()
        try:
            config = aai.TranscriptionConfig(language_code=language_code)
            transcript = self._transcriber.submit(media_url, config=config)
        except Exception as e:
            logger.exception(
                "AssemblyAI submit failed",
                extra={"media_url": media_url},
            )
            raise TranscriptionError("Transcription request failed", e) from e

        if not transcript.id:
            logger.error(
                "AssemblyAI returned no transcript id",
                extra={"media_url": media_url},
            )
            raise TranscriptionError("Transcription provider returned no job id")

        logger.info(
            "Transcript submitted",
            extra={"job_id": transcript.id, "language_code": language_code},
        )
        return self._to_job(transcript, language_code=language_code)

    def get_job(self, job_id: str) -> TranscriptionJob:
        self._require_api_key()
        try:
            transcript = self._fetch_transcript(job_id)
        except Exception as e:
            logger.exception("AssemblyAI lookup failed", extra={"job_id": job_id})
            raise TranscriptionError(f"Failed to fetch transcript '{job_id}'", e) from e

        return self._to_job(transcript, language_code=transcript.language_code)

    def _require_api_key(self) -> None:
        if not self._api_key or self._transcriber is None:
            raise MisconfiguredServerError("ASSEMBLYAI_API_KEY")

    def _to_job(
        self, transcript: aai.Transcript, language_code: str | None = None
    ) -> TranscriptionJob:
        """Converts an SDK transcript into the gateway's job model."""
        status = TranscriptStatus(getattr(transcript.status, "value", transcript.status))
        language_code = getattr(language_code, "value", language_code)
        words = tuple(
            TranscriptWord(
                text=w.text,
                start=w.start,
                end=w.end,
                confidence=w.confidence,
            )
            for w in (transcript.words or [])
        )
        return TranscriptionJob(
            id=transcript.id,
            status=status,
            audio_url=transcript.audio_url,
            language_code=language_code,
            text=transcript.text,
            words=words,
            error=transcript.error,
        )
