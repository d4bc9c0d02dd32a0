import asyncio

import structlog

from reelgate.core.core import Service
from reelgate.core.modules.session.models import SessionRecord, SessionToken
from reelgate.utils import Clock, generate_token, token_prefix

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """In-memory store of session tokens with fixed, non-renewing expiry."""

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._sessions: dict[SessionToken, SessionRecord] = {}
        self._lock = asyncio.Lock()

    async def issue(self) -> SessionToken:
        """Create a new session token and make sure the reaper is running."""
        token = SessionToken(generate_token())
        async with self._lock:
            expires_at = self.clock() + self.core.config.session_token_ttl
            self._sessions[token] = SessionRecord(token=token, expires_at=expires_at)
        self.core.services.reaper.ensure_running()
        logger.info("Session issued", token=token_prefix(token), expires_at=expires_at.isoformat())
        return token

    async def validate(self, token: SessionToken) -> bool:
        """Check a session token, evicting it if it has expired."""
        async with self._lock:
            record = self._sessions.get(token)
            if record is None:
                return False
            if record.is_expired(self.clock()):
                del self._sessions[token]
                logger.debug("Session expired", token=token_prefix(token))
                return False
            return True

    async def revoke(self, token: SessionToken) -> None:
        """Remove a session token. Unknown tokens are ignored."""
        async with self._lock:
            removed = self._sessions.pop(token, None)
        if removed is not None:
            logger.info("Session revoked", token=token_prefix(token))

    async def sweep_expired(self) -> int:
        """Remove every expired session and return how many were dropped."""
        async with self._lock:
            current = self.clock()
            expired = [token for token, record in self._sessions.items() if record.is_expired(current)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def count(self) -> int:
        return len(self._sessions)
