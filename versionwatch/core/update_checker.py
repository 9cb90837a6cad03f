"""Asynchronous one-shot update check with a memoized verdict.

Architecture:
  UpdateCheckEngine.start()  — spawns one daemon thread running check_once()
  result cell                — a concurrent.futures.Future completed exactly
                               once by that thread; readers only peek at it
                               (done() / result() after done), never wait
  settled cell               — the first future to complete; once set it is
                               never replaced, so a verdict is never taken back

Any number of threads may call is_update_available() at any time. Until the
background check has finished they get False.
"""

import logging
import threading
from concurrent.futures import Future

from versionwatch.core import descriptor
from versionwatch.core.comparator import is_newer
from versionwatch.core.errors import FormatError, UpdateCheckError
from versionwatch.core.models import CheckOutcome, EngineConfig, EngineState

logger = logging.getLogger(__name__)


def check_once(config: EngineConfig, fetcher=None) -> CheckOutcome:
    """Fetch, parse and compare. Blocking; raises UpdateCheckError subclasses.

    ``fetcher`` takes (url, timeout) and returns the descriptor bytes.
    """
    fetch = fetcher or descriptor.fetch_descriptor
    data = fetch(config.descriptor_url, config.timeout)
    remote_version = descriptor.parse_version(data, config.version_field)

    try:
        newer = is_newer(config.local_version, remote_version)
    except FormatError as e:
        e.remote_version = remote_version
        raise

    if newer:
        return CheckOutcome.update_available(remote_version)
    return CheckOutcome.no_update(remote_version)


class UpdateCheckEngine:
    """Runs a single background update check and answers non-blocking queries.

    State machine: NOT_STARTED -> RUNNING -> SUCCEEDED | FAILED. The terminal
    states are final for the engine's lifetime, even if start() is called again.
    """

    def __init__(self, config: EngineConfig, fetcher=None):
        self.config = config
        self._fetcher = fetcher
        self._future: Future | None = None
        self._settled: Future | None = None
        self._settle_lock = threading.Lock()

    # ── Lifecycle ────────────────────────────────────────────────────

    def start(self):
        """Launch the background check and return immediately."""
        if self._future is not None:
            logger.warning("Update check already started, starting a redundant one")

        future = Future()
        future.set_running_or_notify_cancel()
        self._future = future

        thread = threading.Thread(
            target=self._run, args=(future,),
            name='versionwatch-update-check', daemon=True,
        )
        thread.start()

    def _run(self, future: Future):
        """Thread entry point. Nothing escapes this frame."""
        logger.info("Checking for %s update...", self.config.app_name or "application")
        try:
            outcome = check_once(self.config, self._fetcher)
        except UpdateCheckError as e:
            logger.error("Error while checking for update: %s", e)
            future.set_exception(e)
        except Exception as e:
            logger.exception("Unexpected error while checking for update")
            future.set_exception(e)
        else:
            if outcome.is_update_available:
                logger.warning("Update available: v%s! Download at %s",
                               outcome.remote_version, self.config.download_url)
            future.set_result(outcome)
        self._settle(future)

    def _settle(self, future: Future):
        with self._settle_lock:
            if self._settled is None:
                self._settled = future

    # ── Queries (never block) ────────────────────────────────────────

    def _snapshot(self) -> tuple[EngineState, Future | None]:
        future = self._settled or self._future
        if future is None:
            return EngineState.NOT_STARTED, None
        if not future.done():
            return EngineState.RUNNING, future
        if future.exception(timeout=0) is not None:
            return EngineState.FAILED, future
        return EngineState.SUCCEEDED, future

    @property
    def state(self) -> EngineState:
        return self._snapshot()[0]

    @property
    def is_done(self) -> bool:
        return self.state in (EngineState.SUCCEEDED, EngineState.FAILED)

    @property
    def error(self) -> BaseException | None:
        """Exception of a failed check, None otherwise."""
        state, future = self._snapshot()
        if state is not EngineState.FAILED:
            return None
        return future.exception(timeout=0)

    @property
    def outcome(self) -> CheckOutcome:
        """Current outcome; a failed check reads as NO_UPDATE.

        After a FormatError the remote version that failed to compare is kept.
        """
        state, future = self._snapshot()
        if state is EngineState.SUCCEEDED:
            return future.result(timeout=0)
        if state is EngineState.FAILED:
            error = future.exception(timeout=0)
            return CheckOutcome.no_update(getattr(error, 'remote_version', None))
        return CheckOutcome.pending()

    def is_update_available(self) -> bool:
        return self.outcome.is_update_available

    def get_remote_version(self) -> str | None:
        return self.outcome.remote_version
