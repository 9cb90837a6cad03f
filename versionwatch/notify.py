"""Session notifications — tells privileged users that an update exists.

The host calls UpdateNotifier.on_session_start() from its own event path
(e.g. when a user joins). The engine is only peeked at, so this is safe to
call from any thread at any time.
"""

import logging
from typing import Protocol

from versionwatch.core.models import CheckOutcome
from versionwatch.core.update_checker import UpdateCheckEngine

logger = logging.getLogger(__name__)


class Session(Protocol):
    """What the notifier needs from a host user session."""

    def has_permission(self, permission: str) -> bool: ...

    def send_message(self, text: str) -> None: ...


class UpdateNotifier:
    """Composes and delivers the "update available" message."""

    def __init__(self, engine: UpdateCheckEngine):
        self.engine = engine

    def compose_message(self, outcome: CheckOutcome | None = None) -> str | None:
        """Message text, or None while no update is known.

        ``outcome`` defaults to a single read of the engine's current outcome.
        """
        if outcome is None:
            outcome = self.engine.outcome
        if not outcome.is_update_available:
            return None
        config = self.engine.config
        name = config.app_name or "Application"
        return (f"{config.message_header}{name} update available: "
                f"v{outcome.remote_version}. "
                f"Download at {config.download_url}")

    def should_notify(self, session: Session) -> bool:
        permission = self.engine.config.notification_permission
        if permission and not session.has_permission(permission):
            return False
        return True

    def on_session_start(self, session: Session) -> bool:
        """Send the message to ``session`` if relevant. Returns True if sent."""
        outcome = self.engine.outcome
        message = self.compose_message(outcome)
        if message is None or not self.should_notify(session):
            return False
        session.send_message(message)
        logger.debug("Notified session of update v%s", outcome.remote_version)
        return True


# ── Qt bridge ────────────────────────────────────────────────────────

# PyQt6 is imported only when the bridge is used, so the core and the
# plain notifier stay free of any Qt dependency

def _get_qt_notifier_class():
    """Lazy import to avoid PyQt6 at module level."""
    from PyQt6.QtCore import QObject, pyqtSignal

    class QtUpdateNotifier(QObject):
        """Re-emits update notifications as Qt signals.

        Signals are dispatched to the receiver's thread by Qt, so a GUI can
        connect widgets directly.
        """

        message_ready = pyqtSignal(str)        # Text for the session
        update_available = pyqtSignal(str)     # Remote version

        def __init__(self, engine: UpdateCheckEngine, parent=None):
            super().__init__(parent)
            self._notifier = UpdateNotifier(engine)

        def session_started(self, session: Session) -> bool:
            outcome = self._notifier.engine.outcome
            message = self._notifier.compose_message(outcome)
            if message is None or not self._notifier.should_notify(session):
                return False
            self.update_available.emit(outcome.remote_version)
            self.message_ready.emit(message)
            session.send_message(message)
            return True

    return QtUpdateNotifier


# Module-level accessor
_QtUpdateNotifierClass = None


def get_qt_notifier_class():
    """Get the QtUpdateNotifier class (lazy-imported to avoid PyQt6 at import time)."""
    global _QtUpdateNotifierClass
    if _QtUpdateNotifierClass is None:
        _QtUpdateNotifierClass = _get_qt_notifier_class()
    return _QtUpdateNotifierClass
