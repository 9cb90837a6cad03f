"""Centralized branding constants — single source of truth for version."""


class AppBranding:
    """Application identity constants."""

    APP_NAME = "VersionWatch"
    VERSION = "1.0.0"

    @classmethod
    def user_agent(cls) -> str:
        return f"{cls.APP_NAME}/{cls.VERSION}"
