"""Tests for stream planning."""

import pytest

from reelgate.errors import NotFoundError, RangeNotSatisfiableError


class TestPrepareStream:
    def test_no_range_serves_whole_file(self, core):
        """Test that a request without Range plans the whole file."""
        stream = core.services.video.prepare_stream(None)
        assert stream.status_code == 200
        assert (stream.start, stream.length) == (0, 1000)
        assert stream.headers == {"Accept-Ranges": "bytes", "Content-Length": "1000"}
        assert stream.file.media_type == "video/mp4"

    def test_range_serves_partial_content(self, core):
        """Test that a Range header plans a 206 response for that span."""
        stream = core.services.video.prepare_stream("bytes=0-99")
        assert stream.status_code == 206
        assert (stream.start, stream.length) == (0, 100)
        assert stream.headers == {
            "Accept-Ranges": "bytes",
            "Content-Length": "100",
            "Content-Range": "bytes 0-99/1000",
        }

    def test_malformed_range(self, core):
        """Test that a malformed Range is refused with 416 and the file size."""
        with pytest.raises(RangeNotSatisfiableError):
            core.services.video.prepare_stream("bytes=x-y")

    def test_missing_file(self, core, video_file):
        """Test that a vanished video file surfaces as NotFoundError with details."""
        video_file.unlink()
        with pytest.raises(NotFoundError) as exc_info:
            core.services.video.prepare_stream("bytes=0-99")
        assert exc_info.value.details == "Video file not found: movie.mp4"

    def test_configured_media_type(self, config, clock):
        """Test that the configured media type is used for the stream."""
        from reelgate.core.core import Core

        core = Core(config.model_copy(update={"video_media_type": "video/webm"}), clock)
        assert core.services.video.check_video_file().media_type == "video/webm"
