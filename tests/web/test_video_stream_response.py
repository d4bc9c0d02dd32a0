"""Tests for the streaming response's handling of client disconnects."""

import asyncio

import anyio

from reelgate.core.modules.video.models import ByteRange, VideoFileInfo, VideoStream
from reelgate.web import responses
from reelgate.web.responses import VideoStreamResponse


def make_stream(video_file, byte_range=None):
    return VideoStream(
        file=VideoFileInfo(file_path=video_file, size=1000, media_type="video/mp4"),
        byte_range=byte_range,
    )


def test_completes_and_ends_body(video_file, video_bytes):
    """Test that a finished stream sends every byte and closes the body."""
    response = VideoStreamResponse(make_stream(video_file, ByteRange(start=10, end=209, size=1000)), chunk_size=64)
    sent = []

    async def send(message):
        sent.append(message)

    async def receive():
        await asyncio.Event().wait()  # client never disconnects

    asyncio.run(asyncio.wait_for(response({"type": "http"}, receive, send), timeout=5))

    assert sent[0]["status"] == 206
    assert (b"content-range", b"bytes 10-209/1000") in sent[0]["headers"]
    assert b"".join(message.get("body", b"") for message in sent[1:]) == video_bytes[10:210]
    assert sent[-1]["more_body"] is False


def test_disconnect_closes_file(video_file, monkeypatch):
    """Test that a client abort stops the stream and closes the reader."""
    state = {"closed": False, "chunks": 0}

    async def tracking_iter(path, start, length, chunk_size):
        try:
            for _ in range(0, length, chunk_size):
                state["chunks"] += 1
                yield b"x" * chunk_size
        finally:
            state["closed"] = True

    monkeypatch.setattr(responses, "iter_file_range", tracking_iter)
    response = VideoStreamResponse(make_stream(video_file), chunk_size=10)

    async def scenario():
        first_chunk = asyncio.Event()
        sent = []

        async def send(message):
            sent.append(message)
            if message["type"] == "http.response.body":
                first_chunk.set()
                await asyncio.Event().wait()  # client stopped reading

        async def receive():
            await first_chunk.wait()
            return {"type": "http.disconnect"}

        await asyncio.wait_for(response({"type": "http"}, receive, send), timeout=5)
        return sent

    sent = asyncio.run(scenario())
    assert state["closed"] is True
    assert state["chunks"] == 1
    assert not any(message.get("more_body") is False for message in sent)


def test_disconnect_closes_real_file_handle(video_file, monkeypatch):
    """Test that a client abort closes the file opened by the real reader."""
    opened = []
    real_open_file = anyio.open_file

    async def tracking_open_file(*args, **kwargs):
        file = await real_open_file(*args, **kwargs)
        opened.append(file)
        return file

    monkeypatch.setattr(anyio, "open_file", tracking_open_file)
    response = VideoStreamResponse(make_stream(video_file), chunk_size=10)

    async def scenario():
        first_chunk = asyncio.Event()

        async def send(message):
            if message["type"] == "http.response.body":
                first_chunk.set()
                await asyncio.Event().wait()  # client stopped reading

        async def receive():
            await first_chunk.wait()
            return {"type": "http.disconnect"}

        await asyncio.wait_for(response({"type": "http"}, receive, send), timeout=5)

    asyncio.run(scenario())
    assert len(opened) == 1
    assert opened[0].wrapped.closed is True
