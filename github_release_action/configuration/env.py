"""Pydantic Settings model for application configuration.

GitHub Actions exposes step inputs as ``INPUT_<NAME>`` environment variables,
with the input name upper-cased and hyphens preserved.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    # Generic application-wide settings
    DEBUG: bool = False
    RATE_LIMIT_RETRIES: int = 0

    # Runner context
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_REPOSITORY: str | None = None
    GITHUB_SHA: str | None = None
    GITHUB_OUTPUT: str | None = None

    # Action inputs
    VERSION: str | None = Field(default=None, validation_alias="INPUT_VERSION")
    NAME: str | None = Field(default=None, validation_alias="INPUT_NAME")
    GITHUB_TOKEN: str | None = Field(default=None, validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"))
    WEBHOOK_URL: str | None = Field(default=None, validation_alias="INPUT_TEAM_WEBHOOK")
    FILES: str | None = Field(default=None, validation_alias="INPUT_FILES")
    WITH_AQUASEC: bool = Field(default=False, validation_alias="INPUT_WITH-AQUASEC")
    NOTIFICATION_PROVIDER: str | None = Field(default=None, validation_alias="INPUT_NOTIFICATION-PROVIDER")
    RELEASE_NAME_TEMPLATE: str | None = Field(default=None, validation_alias="INPUT_RELEASE-NAME-TEMPLATE")
