import secrets
from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def now() -> datetime:
    return datetime.now(UTC)


def generate_token() -> str:
    """Return 256 bits from the OS CSPRNG as a 64-char hex string."""
    return secrets.token_hex(32)


def token_prefix(token: str) -> str:
    """Shortened token for log lines."""
    return token[:8]
