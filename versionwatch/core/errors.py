"""Update check error taxonomy.

Every error raised while checking is an ``UpdateCheckError``; the engine
catches them at the boundary of its background task.
"""


class UpdateCheckError(Exception):
    """Base class for failures during an update check."""


class NetworkError(UpdateCheckError):
    """Descriptor could not be fetched (connection, DNS, HTTP status, timeout)."""


class ParseError(UpdateCheckError):
    """Descriptor is malformed or has no usable version field."""


class FormatError(UpdateCheckError, ValueError):
    """Version string contains a segment that is not a non-negative integer."""

    def __init__(self, message: str, remote_version: str | None = None):
        super().__init__(message)
        # Set when the descriptor parsed fine but a version did not compare
        self.remote_version = remote_version
