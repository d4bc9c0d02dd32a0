"""File access for the configured video."""

from collections.abc import AsyncIterator
from pathlib import Path

import anyio
import structlog

from reelgate.errors import NotFoundError

logger = structlog.get_logger(__name__)

NOT_AVAILABLE = "Video not available"


def resolve_video_file(video_path: str) -> tuple[Path, int]:
    """Check that the configured video exists and is a regular file.

    Returns:
        Tuple of (path, size in bytes)

    Raises:
        NotFoundError: With a details string naming the problem. Only the file
            name is included, never the configured directory.
    """
    if not video_path:
        raise NotFoundError(NOT_AVAILABLE, "Video path not configured")

    path = Path(video_path)
    try:
        if not path.exists():
            raise NotFoundError(NOT_AVAILABLE, f"Video file not found: {path.name}")
        if not path.is_file():
            raise NotFoundError(NOT_AVAILABLE, f"Path exists but is not a file: {path.name}")
        size = path.stat().st_size
    except OSError:
        logger.exception("Error checking video file", path=video_path)
        raise NotFoundError(NOT_AVAILABLE, "Error accessing video file") from None
    return path, size


async def iter_file_range(path: Path, start: int, length: int, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield `length` bytes of `path` starting at `start`, one chunk at a time.

    The file handle is closed when the generator finishes or is closed early.
    """
    async with await anyio.open_file(path, "rb") as file:
        await file.seek(start)
        remaining = length
        while remaining > 0:
            chunk = await file.read(min(chunk_size, remaining))
            if not chunk:
                logger.warning("Video file shorter than expected", path=str(path), missing=remaining)
                return
            remaining -= len(chunk)
            yield chunk
