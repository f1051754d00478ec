"""Tag listing, dating and creation."""

from datetime import datetime
from typing import Any

import structlog
from githubkit.exception import RequestFailed

from github_release_action.github.abc import GitHubClientBase
from github_release_action.utils.github import tag_ref
from github_release_action.utils.helpers import parse_github_timestamp

from .exceptions import InsufficientTagsError, RefCreationError
from .models import ChangelogBounds, TagInfo

logger = structlog.get_logger(__name__)


def commit_date(commit_data: dict[str, Any]) -> datetime | None:
    """Extract the committer date (falling back to the author date) from raw commit data."""
    commit = commit_data.get("commit") or {}
    for role in ("committer", "author"):
        person = commit.get(role) or {}
        date = parse_github_timestamp(person.get("date"))
        if date is not None:
            return date
    return None


def sort_tags_by_date(tags: list[TagInfo]) -> list[TagInfo]:
    """Sort dated tags newest first."""
    return sorted((tag for tag in tags if tag.date is not None), key=lambda tag: tag.date, reverse=True)  # type: ignore[arg-type,return-value]


def select_changelog_bounds(dated_tags: list[TagInfo]) -> ChangelogBounds:
    """Pick the latest and second-to-last tags from a newest-first list.

    Raises:
        InsufficientTagsError: If there is no dated tag at all.
    """
    if not dated_tags:
        raise InsufficientTagsError("No valid tags found to generate a changelog")
    previous = dated_tags[1] if len(dated_tags) > 1 else None
    return ChangelogBounds(latest=dated_tags[0], previous=previous)


class TagResolver:
    """Lists repository tags, resolves their dates and creates missing tags."""

    def __init__(self, adapter: GitHubClientBase) -> None:
        self.adapter = adapter

    async def list_tags(self) -> list[TagInfo]:
        """List every tag of the repository, without dates."""
        tags = await self.adapter.list_tags()
        return [TagInfo(name=tag.name, sha=tag.commit.sha) for tag in tags]

    async def resolve_tag_dates(self, tags: list[TagInfo]) -> list[TagInfo]:
        """Fill in missing tag dates from their commits, dropping tags that cannot be dated."""
        dated: list[TagInfo] = []
        for tag in tags:
            if tag.date is None:
                try:
                    tag.date = commit_date(await self.adapter.get_commit(tag.sha))
                except (RequestFailed, ValueError) as exc:
                    logger.warning("Failed to fetch commit for tag, skipping", tag=tag.name, sha=tag.sha, error=str(exc))
                    continue
            if tag.date is None:
                logger.warning("Tag has no resolvable date, skipping", tag=tag.name, sha=tag.sha)
                continue
            dated.append(tag)
        return dated

    async def list_dated_tags(self, tags: list[TagInfo]) -> list[TagInfo]:
        """Resolve dates for the given tags and return them newest first."""
        dated = sort_tags_by_date(await self.resolve_tag_dates(tags))
        logger.info("Resolved tag dates", total_tags=len(tags), dated_tags=len(dated), latest=dated[0].name if dated else None)
        return dated

    async def ensure_tag(self, version: str, sha: str, tags: list[TagInfo]) -> bool:
        """Create the tag for ``version`` unless a tag with exactly that name exists.

        Returns:
            True if the tag ref was created, False if it already existed.

        Raises:
            RefCreationError: If the hosting API refuses to create the ref.
        """
        tag_exists = any(tag.name == version for tag in tags)
        logger.info("Checked whether tag exists", version=version, tag_exists=tag_exists)
        if tag_exists:
            return False

        logger.info("Creating tag", version=version, sha=sha)
        try:
            await self.adapter.create_tag_ref(version, sha)
        except (RequestFailed, ValueError) as exc:
            raise RefCreationError(ref=tag_ref(version), sha=sha, reason=str(exc)) from exc
        return True
