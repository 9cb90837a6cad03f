"""Segment-wise numeric version comparison.

Versions are compared as dot-separated integers, so 2.0, 1.2 and 1.1.1 are
all newer than 1.1. No pre-release or build metadata handling.
"""

import re
from enum import Enum

from versionwatch.core.errors import FormatError

_SEGMENT = re.compile(r'[0-9]+')


class Comparison(Enum):
    """Ordering of the local version relative to the remote one."""
    GREATER = 1
    EQUAL = 0
    LESS = -1


def parse_segments(version: str) -> tuple[int, ...]:
    """Split "1.2.10" into (1, 2, 10). Raises FormatError on non-numeric segments."""
    segments = version.split('.')
    for segment in segments:
        if not _SEGMENT.fullmatch(segment):
            raise FormatError(f"Invalid version segment {segment!r} in {version!r}")
    return tuple(int(s) for s in segments)


def compare(local: str, remote: str) -> Comparison:
    # Identical strings never need parsing
    if local == remote:
        return Comparison.EQUAL

    local_parts = parse_segments(local)
    remote_parts = parse_segments(remote)

    for mine, theirs in zip(local_parts, remote_parts):
        if mine > theirs:
            return Comparison.GREATER
        if mine < theirs:
            return Comparison.LESS

    # Same prefix: remote has extra segments (2.2 vs 2.2.1)
    if len(local_parts) < len(remote_parts):
        return Comparison.LESS
    if len(local_parts) > len(remote_parts):
        return Comparison.GREATER
    return Comparison.EQUAL


def is_newer(local: str, remote: str) -> bool:
    """True if ``remote`` is a newer version than ``local``."""
    return compare(local, remote) is Comparison.LESS
