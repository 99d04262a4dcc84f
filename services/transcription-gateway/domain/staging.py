"""Scoped temporary storage for uploads awaiting validation and relay."""

import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from transcipio_common.logging import setup_logging

logger = setup_logging()

_CHUNK_SIZE = 1024 * 1024


class StagedUpload:
    """A temp file holding an upload; ``size`` counts the bytes written."""

    def __init__(self, path: Path, size: int):
        self.path = path
        self.size = size


def remove_quietly(path: Path) -> None:
    """Deletes a temp artifact, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Temp file cleanup failed", extra={"path": str(path)}, exc_info=True)


@contextmanager
def staged_upload(
    source: BinaryIO, tmp_dir: Path, max_bytes: int
) -> Generator[StagedUpload, None, None]:
    """
    Copies an upload into ``tmp_dir`` and removes it on every exit path.

    At most ``max_bytes + 1`` bytes are copied, which is enough for the size
    check to reject the upload without spooling the rest of it to disk.
    """
    handle = tempfile.NamedTemporaryFile(dir=tmp_dir, prefix="upload_", delete=False)
    path = Path(handle.name)
    try:
        with handle:
            remaining = max_bytes + 1
            while remaining > 0:
                chunk = source.read(min(_CHUNK_SIZE, remaining))
                if not chunk:
                    break
                handle.write(chunk)
                remaining -= len(chunk)
            size = handle.tell()
        yield StagedUpload(path=path, size=size)
    finally:
        remove_quietly(path)
