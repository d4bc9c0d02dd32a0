"""Session token models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel, ConfigDict

SessionToken = NewType("SessionToken", str)


class SessionRecord(BaseModel):
    """Session granted after a successful password check.

    Never mutated after creation; removed on expiry or logout.
    """

    token: SessionToken
    expires_at: datetime

    model_config = ConfigDict(frozen=True)

    def is_expired(self, at: datetime) -> bool:
        return at > self.expires_at
