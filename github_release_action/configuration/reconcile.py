"""Reconcile release configuration between CLI arguments and environment variables."""

import structlog

from github_release_action.configuration.env import Settings
from github_release_action.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from github_release_action.configuration.models import NotificationProvider, ReleaseConfig
from github_release_action.utils.constants import DEFAULT_RELEASE_NAME_TEMPLATE
from github_release_action.utils.helpers import split_delimited_paths

logger = structlog.get_logger(__name__)


def _require(value: str | None, name: str, cli_name: str, env_name: str) -> str:
    """Return a required configuration value or raise if it is missing."""
    if value is None or not value.strip():
        raise RequiredConfigurationElementError(name=name, cli_name=cli_name, env_name=env_name)
    return value.strip()


async def resolve_notification_provider(provider: str | None) -> NotificationProvider:
    """Resolve the notification provider, defaulting to Slack."""
    if provider is None or not provider.strip():
        return NotificationProvider.SLACK
    try:
        return NotificationProvider(provider.strip().lower())
    except ValueError as exc:
        supported = ", ".join(p.value for p in NotificationProvider)
        raise InvalidConfigurationElementError(f"Unsupported notification provider '{provider}'. Supported providers: {supported}") from exc


async def reconcile_release_configuration(
    cli_debug: bool | None = None,
    cli_github_api_url: str | None = None,
    cli_github_token: str | None = None,
    cli_repo: str | None = None,
    cli_sha: str | None = None,
    cli_version: str | None = None,
    cli_name: str | None = None,
    cli_webhook_url: str | None = None,
    cli_notification_provider: str | None = None,
    cli_files: str | None = None,
    cli_with_aquasec: bool | None = None,
    cli_release_name_template: str | None = None,
    settings: Settings | None = None,
) -> ReleaseConfig:
    """Reconcile CLI arguments with environment settings into a release configuration.

    Values passed on the command line take precedence over environment
    variables (including GitHub Actions ``INPUT_*`` variables).

    Raises:
        RequiredConfigurationElementError: If a required element is missing from both sources.
        InvalidConfigurationElementError: If the notification provider is not supported.
    """
    if settings is None:
        settings = Settings()

    version = _require(cli_version or settings.VERSION, "Release version", "--version", "INPUT_VERSION")
    name = _require(cli_name or settings.NAME, "Project name", "--name", "INPUT_NAME")
    github_token = _require(cli_github_token or settings.GITHUB_TOKEN, "GitHub token", "--github-token", "INPUT_GITHUB-TOKEN")
    repo = _require(cli_repo or settings.GITHUB_REPOSITORY, "Repository", "--repo", "GITHUB_REPOSITORY")
    sha = _require(cli_sha or settings.GITHUB_SHA, "Commit SHA", "--sha", "GITHUB_SHA")

    webhook_url = cli_webhook_url or settings.WEBHOOK_URL
    if webhook_url is not None and not webhook_url.strip():
        webhook_url = None

    files_input = cli_files if cli_files is not None else settings.FILES
    files = split_delimited_paths(files_input)

    config = ReleaseConfig(
        debug=cli_debug if cli_debug is not None else settings.DEBUG,
        github_api_url=cli_github_api_url or settings.GITHUB_API_URL,
        github_token=github_token,
        repo=repo,
        sha=sha,
        version=version,
        name=name,
        webhook_url=webhook_url.strip() if webhook_url else None,
        notification_provider=await resolve_notification_provider(cli_notification_provider or settings.NOTIFICATION_PROVIDER),
        files=files,
        with_aquasec=cli_with_aquasec if cli_with_aquasec is not None else settings.WITH_AQUASEC,
        release_name_template=cli_release_name_template or settings.RELEASE_NAME_TEMPLATE or DEFAULT_RELEASE_NAME_TEMPLATE,
        github_output=settings.GITHUB_OUTPUT,
        rate_limit_retries=settings.RATE_LIMIT_RETRIES,
    )
    logger.debug(
        "Reconciled release configuration",
        repo=config.repo,
        version=config.version,
        files=config.files,
        with_aquasec=config.with_aquasec,
        notification_provider=config.notification_provider.value,
        notification_enabled=config.webhook_url is not None,
    )
    return config
