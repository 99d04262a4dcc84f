"""Core business logic for upload validation and filename sanitization."""

import os
import re
import secrets
import time
from urllib.parse import urlparse

from exceptions import FileTooLargeError, InvalidFileTypeError, InvalidMediaUrlError

from .models import SanitizedFile

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def generate_safe_name(original_name: str) -> str:
    """
    Builds a collision-resistant, traversal-free name for an upload.

    The result is ``<epoch-millis>_<20 hex chars>_<base><ext>`` where the
    base keeps only alphanumerics, dash, underscore and dot, and the
    extension keeps only alphanumerics and is lowercased. An extension with
    nothing left after stripping is dropped.
    """
    # Browsers may send Windows paths; strip both separator styles.
    basename = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    base, ext = os.path.splitext(basename)
    base = _UNSAFE_CHARS.sub("_", base) or "upload"
    ext = _NON_ALNUM.sub("", ext.lower())
    ext = f".{ext}" if ext else ""
    token = secrets.token_hex(10)
    return f"{int(time.time() * 1000)}_{token}_{base}{ext}"


def validate_media_url(url: str | None) -> str:
    """Returns the URL unchanged if it is an absolute http(s) URL."""
    if not url:
        raise InvalidMediaUrlError(url)
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidMediaUrlError(url)
    return url


class UploadValidator:
    """Checks declared upload metadata against the configured policy."""

    def __init__(self, allowed_mime_prefixes: tuple[str, ...], max_file_bytes: int):
        self._allowed_mime_prefixes = allowed_mime_prefixes
        self._max_file_bytes = max_file_bytes

    @property
    def max_file_bytes(self) -> int:
        return self._max_file_bytes

    def validate(
        self, content_type: str | None, size: int, filename: str | None
    ) -> SanitizedFile:
        """
        Validates an upload and derives its sanitized name.

        Args:
            content_type: Declared MIME type.
            size: Size of the upload in bytes.
            filename: Client-supplied filename, possibly hostile.

        Returns:
            SanitizedFile describing the accepted upload.

        Raises:
            InvalidFileTypeError: If the MIME type is not allow-listed.
            FileTooLargeError: If the size exceeds the ceiling.
        """
        mime_type = content_type or ""
        if not any(mime_type.startswith(p) for p in self._allowed_mime_prefixes):
            raise InvalidFileTypeError(mime_type)

        if size > self._max_file_bytes:
            raise FileTooLargeError(size, self._max_file_bytes)

        original_name = filename or "upload"
        return SanitizedFile(
            name=generate_safe_name(original_name),
            original_name=original_name,
            size=size,
            mime_type=mime_type,
        )
