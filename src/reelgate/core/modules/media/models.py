"""Media token models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel, ConfigDict

from reelgate.core.modules.session.models import SessionToken

MediaToken = NewType("MediaToken", str)


class MediaTokenRecord(BaseModel):
    """Short-lived credential that only authorizes the video stream.

    `session_token` is a lookup key into the session store, not a reference
    to the session record, so revocation has a single source of truth.
    """

    token: MediaToken
    expires_at: datetime
    session_token: SessionToken

    model_config = ConfigDict(frozen=True)

    def is_expired(self, at: datetime) -> bool:
        return at > self.expires_at
