"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from github_release_action.configuration import reconcile
from github_release_action.configuration.models import ReleaseConfig


def get_release_config(
    debug: bool | None = None,
    github_api_url: str | None = None,
    github_token: str | None = None,
    repo: str | None = None,
    sha: str | None = None,
    version: str | None = None,
    name: str | None = None,
    webhook_url: str | None = None,
    notification_provider: str | None = None,
    files: str | None = None,
    with_aquasec: bool | None = None,
    release_name_template: str | None = None,
) -> ReleaseConfig:
    """Synchronously get the reconciled release configuration."""
    return asyncio.run(
        reconcile.reconcile_release_configuration(
            cli_debug=debug,
            cli_github_api_url=github_api_url,
            cli_github_token=github_token,
            cli_repo=repo,
            cli_sha=sha,
            cli_version=version,
            cli_name=name,
            cli_webhook_url=webhook_url,
            cli_notification_provider=notification_provider,
            cli_files=files,
            cli_with_aquasec=with_aquasec,
            cli_release_name_template=release_name_template,
        )
    )
