from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class VideoFileInfo(BaseModel):
    """Resolved video file on disk."""

    file_path: Path = Field(..., description="Path to the video file")
    size: int = Field(..., description="File size in bytes")
    media_type: str = Field(..., description="Content type sent to clients")


class ByteRange(BaseModel):
    """Inclusive byte span within a file of `size` bytes."""

    start: int
    end: int
    size: int

    model_config = ConfigDict(frozen=True)

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.size}"


class VideoStream(BaseModel):
    """Everything the web layer needs to answer a stream request."""

    file: VideoFileInfo
    byte_range: ByteRange | None = None  # None means the whole file

    @property
    def status_code(self) -> int:
        return 200 if self.byte_range is None else 206

    @property
    def start(self) -> int:
        return 0 if self.byte_range is None else self.byte_range.start

    @property
    def length(self) -> int:
        return self.file.size if self.byte_range is None else self.byte_range.length

    @property
    def headers(self) -> dict[str, str]:
        headers = {
            "Accept-Ranges": "bytes",
            "Content-Length": str(self.length),
        }
        if self.byte_range is not None:
            headers["Content-Range"] = self.byte_range.content_range
        return headers
