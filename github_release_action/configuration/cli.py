"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typer import Option
from typing_extensions import Annotated

from github_release_action.configuration.driver import get_release_config
from github_release_action.configuration.exceptions import InvalidConfigurationElementError, RequiredConfigurationElementError
from github_release_action.configuration.models import ReleaseConfig
from github_release_action.release.models import ReleaseResult, ReleaseStatus
from github_release_action.release.orchestrator import run_release_workflow
from github_release_action.utils.actions import emit_error, write_step_outputs
from github_release_action.utils.log_config import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def _write_outputs(config: ReleaseConfig, result: ReleaseResult) -> None:
    if not config.github_output:
        return
    write_step_outputs(
        config.github_output,
        {
            "release-id": str(result.release_id or ""),
            "release-url": result.release_url or "",
            "tag-created": str(result.tag_created).lower(),
            "changelog": result.changelog,
        },
    )


@typer_app.command(name="publish")
def publish_cli(
    version: Annotated[str | None, Option(help="Version tag to release. Defaults to INPUT_VERSION.")] = None,
    name: Annotated[str | None, Option(help="Project name used in the notification. Defaults to INPUT_NAME.")] = None,
    github_token: Annotated[str | None, Option(help="GitHub token. Defaults to INPUT_GITHUB-TOKEN or GITHUB_TOKEN.")] = None,
    repo: Annotated[str | None, Option(help="Repository name (owner/repo). Defaults to GITHUB_REPOSITORY.")] = None,
    sha: Annotated[str | None, Option(help="Commit SHA for a newly created tag. Defaults to GITHUB_SHA.")] = None,
    github_api_url: Annotated[str | None, Option(help="GitHub API URL. Defaults to GITHUB_API_URL.")] = None,
    webhook_url: Annotated[str | None, Option(help="Chat webhook URL. Defaults to INPUT_TEAM_WEBHOOK.")] = None,
    notification_provider: Annotated[str | None, Option(help="Webhook provider: slack or teams.")] = None,
    files: Annotated[str | None, Option(help="Comma or newline separated files to attach. Defaults to INPUT_FILES.")] = None,
    with_aquasec: Annotated[bool | None, Option("--with-aquasec/--without-aquasec", help="Attach ./aquasec.txt.")] = None,
    release_name_template: Annotated[str | None, Option(help="Jinja2 template for the release name.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Create the version tag if needed, then publish a release with a generated changelog."""
    configure_logging(debug)
    try:
        config = get_release_config(
            debug=debug or None,
            github_api_url=github_api_url,
            github_token=github_token,
            repo=repo,
            sha=sha,
            version=version,
            name=name,
            webhook_url=webhook_url,
            notification_provider=notification_provider,
            files=files,
            with_aquasec=with_aquasec,
            release_name_template=release_name_template,
        )
    except (RequiredConfigurationElementError, InvalidConfigurationElementError, ValidationError) as exc:
        emit_error(str(exc))
        raise typer.Exit(1) from exc

    configure_logging(config.debug)
    result = asyncio.run(run_release_workflow(config))
    _write_outputs(config, result)

    if result.status == ReleaseStatus.ERROR:
        emit_error(result.error or "Release failed")
        raise typer.Exit(1)

    typer.echo(f"Published release {config.version} (id {result.release_id}): {result.release_url}")
    if result.tag_created:
        typer.echo(f"Created tag {config.version} at {config.sha}")
    typer.echo(f"Changelog source: {result.changelog_source.value}")
    for asset in result.assets.results:
        typer.echo(f"  {asset.outcome.value}: {asset.path}")
    if result.notified:
        typer.echo(f"Sent {config.notification_provider.value} notification")


if __name__ == "__main__":
    typer_app()
