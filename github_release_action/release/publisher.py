"""Creates the GitHub release for a version tag."""

import structlog
from githubkit.versions.latest.models import Release
from pydantic import BaseModel

from github_release_action.github.abc import GitHubClientBase
from github_release_action.utils.constants import DEFAULT_RELEASE_NAME_TEMPLATE
from github_release_action.utils.templates import render_string_with_model

logger = structlog.get_logger(__name__)


class ReleaseNameContext(BaseModel):
    """Values available to the release name template."""

    version: str
    name: str


class ReleasePublisher:
    """Publishes a non-draft, non-prerelease release bound to a tag."""

    def __init__(self, adapter: GitHubClientBase, name_template: str = DEFAULT_RELEASE_NAME_TEMPLATE) -> None:
        self.adapter = adapter
        self.name_template = name_template

    def render_name(self, version: str, project_name: str) -> str:
        return render_string_with_model(self.name_template, ReleaseNameContext(version=version, name=project_name)).strip()

    async def publish(self, version: str, project_name: str, changelog: str) -> Release:
        """Create the release for ``version`` with the changelog as its body.

        Errors from the hosting API are not caught here.
        """
        release_name = self.render_name(version, project_name)
        logger.info("Creating release", tag_name=version, name=release_name)
        return await self.adapter.create_release(
            tag_name=version,
            name=release_name,
            body=changelog,
            draft=False,
            prerelease=False,
        )
