import structlog

from reelgate.core.core import Service
from reelgate.core.modules.video.models import VideoFileInfo, VideoStream
from reelgate.core.modules.video.range import parse_range_header
from reelgate.core.modules.video.storage import resolve_video_file

logger = structlog.get_logger(__name__)


class VideoService(Service):
    """Resolves the configured video and plans byte-range responses."""

    async def on_start(self) -> None:
        """Warn early when the video is missing; requests still re-check it."""
        path = self.core.config.video_path
        if not path:
            logger.warning("Video path not configured")
        else:
            logger.info("Serving video", path=path)

    def check_video_file(self) -> VideoFileInfo:
        """Resolve the configured video file.

        Raises:
            NotFoundError: If the video is not configured, missing or not a regular file
        """
        file_path, size = resolve_video_file(self.core.config.video_path)
        return VideoFileInfo(file_path=file_path, size=size, media_type=self.core.config.video_media_type)

    def prepare_stream(self, range_header: str | None) -> VideoStream:
        """Build the stream plan for a request.

        Raises:
            NotFoundError: If the video file is unavailable
            RangeNotSatisfiableError: If the Range header is malformed or out of bounds
        """
        file = self.check_video_file()
        if range_header is None:
            return VideoStream(file=file)
        return VideoStream(file=file, byte_range=parse_range_header(range_header, file.size))
