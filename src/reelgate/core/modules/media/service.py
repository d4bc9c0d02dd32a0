import asyncio

import structlog

from reelgate.core.core import Service
from reelgate.core.modules.media.models import MediaToken, MediaTokenRecord
from reelgate.core.modules.session.models import SessionToken
from reelgate.errors import AuthenticationError
from reelgate.utils import Clock, generate_token, token_prefix

logger = structlog.get_logger(__name__)


class MediaTokenService(Service):
    """In-memory store of media tokens, each bound to a session token.

    A media token is only valid while its parent session is. The store calls
    into the session service while holding its own lock; the session service
    never calls back, so lock order is always media -> session.
    """

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._tokens: dict[MediaToken, MediaTokenRecord] = {}
        self._lock = asyncio.Lock()

    async def issue(self, session_token: SessionToken) -> MediaToken:
        """Return the live media token for a session, creating one if needed.

        Raises:
            AuthenticationError: If the session token is not valid
        """
        async with self._lock:
            if not await self.core.services.session.validate(session_token):
                raise AuthenticationError

            current = self.clock()
            existing = next(
                (
                    record
                    for record in self._tokens.values()
                    if record.session_token == session_token and not record.is_expired(current)
                ),
                None,
            )
            if existing is not None:
                logger.debug("Media token reused", token=token_prefix(existing.token))
                return existing.token

            token = MediaToken(generate_token())
            self._tokens[token] = MediaTokenRecord(
                token=token,
                expires_at=current + self.core.config.media_token_ttl,
                session_token=session_token,
            )

        self.core.services.reaper.ensure_running()
        logger.info("Media token issued", token=token_prefix(token), session=token_prefix(session_token))
        return token

    async def validate(self, token: MediaToken) -> bool:
        """Check a media token and, through it, its parent session."""
        async with self._lock:
            record = self._tokens.get(token)
            if record is None:
                return False
            if record.is_expired(self.clock()):
                del self._tokens[token]
                logger.debug("Media token expired", token=token_prefix(token))
                return False
            if not await self.core.services.session.validate(record.session_token):
                del self._tokens[token]
                logger.info("Media token invalidated with its session", token=token_prefix(token))
                return False
            return True

    async def revoke_by_session(self, session_token: SessionToken) -> int:
        """Remove all media tokens derived from a session."""
        async with self._lock:
            tokens = [token for token, record in self._tokens.items() if record.session_token == session_token]
            for token in tokens:
                del self._tokens[token]
        if tokens:
            logger.info("Media tokens revoked", session=token_prefix(session_token), count=len(tokens))
        return len(tokens)

    async def sweep_expired(self) -> int:
        """Remove every expired media token and return how many were dropped."""
        async with self._lock:
            current = self.clock()
            expired = [token for token, record in self._tokens.items() if record.is_expired(current)]
            for token in expired:
                del self._tokens[token]
        return len(expired)

    def count(self) -> int:
        return len(self._tokens)
