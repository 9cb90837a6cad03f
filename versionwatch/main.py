"""VersionWatch — command-line entry point.

Runs one update check for the configured application and reports the
verdict through the exit code:
  0  up to date
  1  check failed, or no result before --wait ran out
  2  incomplete configuration
  10 update available
"""

import argparse
import logging
import os
import sys
import time

from versionwatch.branding import AppBranding
from versionwatch.config.settings import CheckerSettings
from versionwatch.core.models import EngineState
from versionwatch.core.update_checker import UpdateCheckEngine

EXIT_UP_TO_DATE = 0
EXIT_FAILED = 1
EXIT_BAD_CONFIG = 2
EXIT_UPDATE_AVAILABLE = 10

# How often the CLI peeks at the engine while waiting
POLL_INTERVAL = 0.05


def setup_logging(data_dir: str, verbose: bool = False):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'versionwatch.log')

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='versionwatch',
        description="Check whether a newer release of an application exists.",
    )
    parser.add_argument('--config', help="Path to settings.json")
    parser.add_argument('--descriptor-url', help="URL of the remote version descriptor")
    parser.add_argument('--local-version', help="Currently installed version")
    parser.add_argument('--download-url', help="Where the update can be downloaded")
    parser.add_argument('--app-name', help="Application name used in messages")
    parser.add_argument('--version-field', help="Descriptor field holding the version")
    parser.add_argument('--timeout', type=float, help="Network timeout in seconds")
    parser.add_argument('--wait', type=float, default=60.0,
                        help="Seconds to wait for the check to finish (default: 60)")
    parser.add_argument('--data-dir', help="Directory for logs")
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument('--version', action='version',
                        version=f"%(prog)s {AppBranding.VERSION}")
    return parser


def apply_overrides(settings: CheckerSettings, args: argparse.Namespace) -> CheckerSettings:
    """Command-line flags win over the settings file."""
    for name in ('descriptor_url', 'local_version', 'download_url', 'app_name',
                 'version_field', 'timeout', 'data_dir'):
        value = getattr(args, name)
        if value is not None:
            setattr(settings, name, value)
    return settings


def wait_for_engine(engine: UpdateCheckEngine, timeout: float) -> bool:
    """Poll until the check is done or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while not engine.is_done:
        if time.monotonic() >= deadline:
            return False
        time.sleep(POLL_INTERVAL)
    return True


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = apply_overrides(CheckerSettings.load(args.config), args)
    setup_logging(settings.data_dir, args.verbose)
    logger = logging.getLogger(__name__)

    missing = settings.missing_fields()
    if missing:
        logger.error("Missing configuration: %s", ", ".join(missing))
        return EXIT_BAD_CONFIG

    engine = UpdateCheckEngine(settings.to_engine_config())
    engine.start()

    if not wait_for_engine(engine, args.wait):
        logger.error("No update check result after %.1f seconds", args.wait)
        return EXIT_FAILED

    if engine.state is EngineState.FAILED:
        return EXIT_FAILED

    name = settings.app_name or "Application"
    if engine.is_update_available():
        print(f"{name} update available: v{engine.get_remote_version()}. "
              f"Download at {settings.download_url}")
        return EXIT_UPDATE_AVAILABLE

    print(f"{name} is up to date (v{settings.local_version})")
    return EXIT_UP_TO_DATE


if __name__ == '__main__':
    sys.exit(main())
