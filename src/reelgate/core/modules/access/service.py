import secrets

from reelgate.core.core import Service
from reelgate.core.modules.media.models import MediaToken
from reelgate.core.modules.session.models import SessionToken
from reelgate.errors import AccessDeniedError, AuthenticationError


class AccessService(Service):
    def verify_password(self, password: str) -> bool:
        """Compare a candidate against the configured shared password."""
        return secrets.compare_digest(password.encode("utf-8"), self.core.config.password.encode("utf-8"))

    async def ensure_authenticated(self, session_token: SessionToken) -> None:
        """Ensure the session token is valid, raise AuthenticationError if not."""
        if not await self.core.services.session.validate(session_token):
            raise AuthenticationError

    async def ensure_media_access(self, media_token: MediaToken | None) -> None:
        """Ensure the media token (and its session) is valid, raise AccessDeniedError if not."""
        if not media_token or not await self.core.services.media.validate(media_token):
            raise AccessDeniedError
