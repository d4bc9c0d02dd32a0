"""Parsing of single-span HTTP Range headers."""

import re

from reelgate.core.modules.video.models import ByteRange
from reelgate.errors import RangeNotSatisfiableError

# Bounds longer than any real file offset are malformed, not parsed
RANGE_RE = re.compile(r"^\s*bytes=(\d{1,19})-(\d{0,19})\s*$")


def parse_range_header(header: str, size: int) -> ByteRange:
    """Parse a `bytes=start-end` header against a file of `size` bytes.

    Only a single range with an explicit start is accepted. An end past the
    file is clamped to the last byte. Anything else fails closed.

    Args:
        header: Raw Range header value
        size: Total file size in bytes

    Returns:
        The requested byte span

    Raises:
        RangeNotSatisfiableError: If the header is malformed or outside the file
    """
    match = RANGE_RE.match(header)
    if match is None:
        raise RangeNotSatisfiableError(size, "Malformed range header")

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else size - 1

    if start >= size:
        raise RangeNotSatisfiableError(size)
    if end < start:
        raise RangeNotSatisfiableError(size, "Malformed range header")

    return ByteRange(start=start, end=min(end, size - 1), size=size)
