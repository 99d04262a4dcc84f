"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from domain.models import TranscriptionJob


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def submit(self, media_url: str, language_code: str) -> TranscriptionJob:
        """
        Queues a transcription job for a publicly reachable media URL.

        Args:
            media_url: URL the provider downloads the media from.
            language_code: Spoken language, e.g. "en" or "es".

        Returns:
            The newly created job, normally in the queued state.

        Raises:
            MisconfiguredServerError: If no provider credential is set.
            TranscriptionError: If the provider rejects the request.
        """
        pass

    @abstractmethod
    def get_job(self, job_id: str) -> TranscriptionJob:
        """
        Fetches the current state of a job.

        Raises:
            MisconfiguredServerError: If no provider credential is set.
            TranscriptionError: If the provider lookup fails.
        """
        pass
