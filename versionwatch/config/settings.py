"""Update check settings — persistence via JSON."""

import json
import logging
import os
from dataclasses import dataclass, asdict

from versionwatch.core.models import DEFAULT_TIMEOUT, EngineConfig

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(os.environ.get('LOCALAPPDATA', '.'), 'VersionWatch')


@dataclass
class CheckerSettings:
    """Persistent settings for one watched application."""
    # Remote descriptor
    descriptor_url: str = ""
    version_field: str = "version"
    timeout: float = DEFAULT_TIMEOUT

    # Local application
    app_name: str = ""
    local_version: str = ""
    download_url: str = ""

    # Notification
    notification_permission: str = ""
    message_header: str = ""

    data_dir: str = ""

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR
        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            logger.warning("Invalid timeout %r, using %s", self.timeout, DEFAULT_TIMEOUT)
            self.timeout = DEFAULT_TIMEOUT

    @staticmethod
    def load(path: str | None = None) -> 'CheckerSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return CheckerSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = CheckerSettings(**{k: v for k, v in data.items()
                                          if k in CheckerSettings.__dataclass_fields__})
            logger.info("Loaded settings from %s", path)
            return settings
        except Exception as e:
            logger.warning("Failed to load settings: %s", e)
            return CheckerSettings()

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = os.path.join(self.data_dir, 'settings.json')

        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self), f, indent=2)
            logger.info("Saved settings to %s", path)
        except Exception as e:
            logger.warning("Failed to save settings: %s", e)

    def missing_fields(self) -> list[str]:
        """Names of required fields that are still empty."""
        required = ('descriptor_url', 'local_version')
        return [name for name in required if not getattr(self, name)]

    def to_engine_config(self) -> EngineConfig:
        return EngineConfig(
            descriptor_url=self.descriptor_url,
            local_version=self.local_version,
            download_url=self.download_url,
            app_name=self.app_name,
            notification_permission=self.notification_permission,
            message_header=self.message_header,
            version_field=self.version_field,
            timeout=self.timeout,
        )
