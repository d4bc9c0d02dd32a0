"""Streaming response for the configured video."""

from collections.abc import Awaitable, Callable
from contextlib import aclosing
from functools import partial

import anyio
import structlog
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from reelgate.core.modules.video.models import VideoStream
from reelgate.core.modules.video.storage import iter_file_range

logger = structlog.get_logger(__name__)


class VideoStreamResponse(Response):
    """Pipe a byte span of the video file to the client chunk by chunk.

    Sending runs alongside a listener for `http.disconnect`. Whichever
    finishes first cancels the other, so a viewer who closes the tab or
    seeks elsewhere releases the file handle right away.
    """

    media_type = "video/mp4"

    def __init__(self, stream: VideoStream, chunk_size: int) -> None:
        super().__init__(status_code=stream.status_code, headers=stream.headers, media_type=stream.file.media_type)
        self.stream = stream
        self.chunk_size = chunk_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        async with anyio.create_task_group() as task_group:

            async def wrap(func: Callable[[], Awaitable[None]]) -> None:
                await func()
                task_group.cancel_scope.cancel()

            task_group.start_soon(wrap, partial(self._send_file, send))
            await wrap(partial(self._listen_for_disconnect, receive))

    async def _listen_for_disconnect(self, receive: Receive) -> None:
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                break

    async def _send_file(self, send: Send) -> None:
        await send({"type": "http.response.start", "status": self.status_code, "headers": self.raw_headers})

        sent = 0
        chunks = iter_file_range(self.stream.file.file_path, self.stream.start, self.stream.length, self.chunk_size)
        try:
            async with aclosing(chunks):
                async for chunk in chunks:
                    await send({"type": "http.response.body", "body": chunk, "more_body": True})
                    sent += len(chunk)
        except anyio.get_cancelled_exc_class():
            logger.info("Video stream aborted", start=self.stream.start, sent=sent, expected=self.stream.length)
            raise
        except OSError:
            # Client socket gone while writing, or the file became unreadable mid-stream
            logger.warning(
                "Video stream interrupted", start=self.stream.start, sent=sent, expected=self.stream.length, exc_info=True
            )
            return

        await send({"type": "http.response.body", "body": b"", "more_body": False})
