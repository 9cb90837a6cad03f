"""Update check data models."""

from dataclasses import dataclass
from enum import Enum

# Seconds, applied to the descriptor fetch
DEFAULT_TIMEOUT = 30.0


class OutcomeStatus(Enum):
    PENDING = "pending"
    NO_UPDATE = "no_update"
    UPDATE_AVAILABLE = "update_available"


class EngineState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckOutcome:
    """Result of one update check.

    ``remote_version`` is set whenever the descriptor was parsed, even when
    the remote version is not newer than the local one.
    """

    status: OutcomeStatus
    remote_version: str | None = None

    @classmethod
    def pending(cls) -> 'CheckOutcome':
        return cls(OutcomeStatus.PENDING)

    @classmethod
    def no_update(cls, remote_version: str | None = None) -> 'CheckOutcome':
        return cls(OutcomeStatus.NO_UPDATE, remote_version)

    @classmethod
    def update_available(cls, remote_version: str) -> 'CheckOutcome':
        return cls(OutcomeStatus.UPDATE_AVAILABLE, remote_version)

    @property
    def is_pending(self) -> bool:
        return self.status is OutcomeStatus.PENDING

    @property
    def is_update_available(self) -> bool:
        return self.status is OutcomeStatus.UPDATE_AVAILABLE


@dataclass(frozen=True)
class EngineConfig:
    """Immutable parameters of an update check.

    ``app_name``, ``notification_permission`` and ``message_header`` are not
    interpreted by the engine; they are handed through to the notifier.
    """

    descriptor_url: str
    local_version: str
    download_url: str
    app_name: str = ""
    notification_permission: str = ""
    message_header: str = ""
    version_field: str = "version"
    timeout: float = DEFAULT_TIMEOUT
