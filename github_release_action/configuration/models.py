"""Models for configuration between CLI arguments and environment variables."""

from enum import Enum

from pydantic import BaseModel

from github_release_action.utils.constants import DEFAULT_RELEASE_NAME_TEMPLATE


class NotificationProvider(str, Enum):
    """Enum for chat notification providers."""

    SLACK = "slack"
    TEAMS = "teams"


class ReleaseConfig(BaseModel):
    """Resolved configuration for a single release run."""

    debug: bool = False
    github_api_url: str = "https://api.github.com"
    github_token: str
    repo: str
    sha: str
    version: str
    name: str
    webhook_url: str | None = None
    notification_provider: NotificationProvider = NotificationProvider.SLACK
    files: list[str] = []
    with_aquasec: bool = False
    release_name_template: str = DEFAULT_RELEASE_NAME_TEMPLATE
    github_output: str | None = None
    rate_limit_retries: int = 0
