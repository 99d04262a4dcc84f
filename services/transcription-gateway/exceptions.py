"""Custom exceptions for the transcription gateway."""


class UploadValidationError(Exception):
    """Base class for rejected uploads and malformed transcription requests."""


class MissingFileError(UploadValidationError):
    """Raised when a request carries no file part."""

    def __init__(self):
        super().__init__("No file uploaded")


class InvalidFileTypeError(UploadValidationError):
    """Raised when the declared MIME type is not allow-listed."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__("Invalid file type")


class FileTooLargeError(UploadValidationError):
    """Raised when the upload exceeds the configured byte ceiling."""

    def __init__(self, size: int, max_bytes: int):
        self.size = size
        self.max_bytes = max_bytes
        super().__init__("File too large")


class InvalidMediaUrlError(UploadValidationError):
    """Raised when a media URL is missing or not http(s)."""

    def __init__(self, url: str | None):
        self.url = url
        super().__init__("audio_url must be an http(s) URL")


class MisconfiguredServerError(Exception):
    """Raised when a provider credential or endpoint is not configured."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Server is missing required setting '{setting}'")


class StorageUploadError(Exception):
    """Raised when file upload to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class TranscriptionError(Exception):
    """Raised when the transcription provider rejects or fails a request."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionFailedError(Exception):
    """Raised when a polled job reaches the provider's error status."""

    def __init__(self, job_id: str, message: str | None):
        self.job_id = job_id
        self.message = message or "Transcription failed"
        super().__init__(self.message)


class PollingTimeoutError(Exception):
    """Raised when a job does not finish before the polling deadline."""

    def __init__(self, job_id: str, timeout_seconds: float):
        self.job_id = job_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Transcript '{job_id}' did not finish within {timeout_seconds:g}s"
        )


class PollingCancelledError(Exception):
    """Raised when polling is abandoned by the caller."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Polling for transcript '{job_id}' was cancelled")


class RateLimiterError(Exception):
    """Raised when the rate limit store cannot be reached."""

    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(f"Rate limit check failed for '{key}'")


class GatewayError(Exception):
    """
    Raised by the client when a gateway call fails.

    ``status_code`` is None when no response arrived at all.
    """

    def __init__(self, status_code: int | None, detail: str, cause: Exception | None = None):
        self.status_code = status_code
        self.detail = detail
        self.cause = cause
        if status_code is None:
            super().__init__(f"Gateway unreachable: {detail}")
        else:
            super().__init__(f"Gateway returned {status_code}: {detail}")
