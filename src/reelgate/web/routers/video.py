from typing import Annotated

from fastapi import APIRouter, Header, Query
from pydantic import BaseModel, Field

from reelgate.core.modules.media.models import MediaToken
from reelgate.web.deps import AppDep, SessionTokenDep
from reelgate.web.openapi import ErrorResponse
from reelgate.web.responses import VideoStreamResponse

router = APIRouter(tags=["video"])


class MediaTokenResponse(BaseModel):
    """Media token for the stream URL."""

    token: str = Field(..., description="Media token, pass as ?token= to /api/video-stream")


@router.get(
    "/video-token",
    summary="Get media token",
    description=(
        "Exchange a session token for a 30 minute media token. "
        "Repeated calls return the same token while it is still live."
    ),
    operation_id="getVideoToken",
    responses={
        200: {"description": "Media token"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Video not available"},
    },
)
async def get_video_token(app: AppDep, session_token: SessionTokenDep) -> MediaTokenResponse:
    return MediaTokenResponse(token=await app.get_media_token(session_token))


@router.get(
    "/video-stream",
    summary="Stream video",
    description=(
        "Stream the video. Media players cannot set headers, so the media token travels as a query "
        "parameter. Supports `Range: bytes=start-end` for seeking."
    ),
    operation_id="streamVideo",
    response_class=VideoStreamResponse,
    responses={
        200: {"description": "Whole video", "content": {"video/mp4": {}}},
        206: {"description": "Requested byte range", "content": {"video/mp4": {}}},
        403: {"model": ErrorResponse, "description": "Invalid or expired media token"},
        404: {"model": ErrorResponse, "description": "Video not available"},
        416: {"model": ErrorResponse, "description": "Malformed or unsatisfiable range"},
    },
)
async def stream_video(
    app: AppDep,
    token: Annotated[str | None, Query(description="Media token")] = None,
    range_header: Annotated[str | None, Header(alias="Range")] = None,
) -> VideoStreamResponse:
    stream = await app.open_video_stream(MediaToken(token) if token else None, range_header)
    return VideoStreamResponse(stream, chunk_size=app.config.stream_chunk_size)
