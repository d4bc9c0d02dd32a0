from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog

from reelgate.config import Config
from reelgate.core.core import Core
from reelgate.core.modules.media.models import MediaToken
from reelgate.core.modules.session.models import SessionToken
from reelgate.core.modules.video.models import VideoStream
from reelgate.errors import AuthenticationError, ValidationError
from reelgate.utils import Clock, now

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, validates tokens before delegating to Core."""

    def __init__(self, config: Config, clock: Clock = now) -> None:
        self._core = Core(config, clock)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        if self._core.config.uses_default_password:
            logger.warning("Using the default password, set REELGATE_PASSWORD or config.yaml")
        async with self._core.lifespan():
            yield

    async def is_session_token_valid(self, session_token: SessionToken) -> bool:
        """Check if session token is valid."""
        return await self._core.services.session.validate(session_token)

    async def verify_password(self, password: str | None) -> SessionToken:
        """Exchange the shared password for a session token."""
        if not password:
            raise ValidationError("Password required")
        if not self._core.services.access.verify_password(password):
            raise AuthenticationError("Incorrect password")
        return await self._core.services.session.issue()

    async def get_password(self, session_token: SessionToken) -> str:
        """Return the shared password so an authenticated viewer can pass it on."""
        await self._core.services.access.ensure_authenticated(session_token)
        return self._core.config.password

    async def logout(self, session_token: SessionToken) -> None:
        """Revoke the session and every media token derived from it."""
        await self._core.services.access.ensure_authenticated(session_token)
        await self._core.services.session.revoke(session_token)
        await self._core.services.media.revoke_by_session(session_token)

    async def get_media_token(self, session_token: SessionToken) -> MediaToken:
        """Get the live media token for the session, issuing one if needed (video must exist)."""
        await self._core.services.access.ensure_authenticated(session_token)
        self._core.services.video.check_video_file()
        return await self._core.services.media.issue(session_token)

    async def open_video_stream(self, media_token: MediaToken | None, range_header: str | None) -> VideoStream:
        """Authorize a stream request and plan the bytes to send.

        The media token is checked before the file is touched, so an invalid
        token never learns whether the video exists.
        """
        await self._core.services.access.ensure_media_access(media_token)
        stream = self._core.services.video.prepare_stream(range_header)
        logger.debug("Video stream opened", status=stream.status_code, start=stream.start, length=stream.length)
        return stream
