"""Changelog generation from merged pull requests or commits."""

from datetime import datetime
from typing import Any

import structlog
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import PullRequestSimple

from github_release_action.github.abc import GitHubClientBase
from github_release_action.utils.constants import PULL_REQUEST_PAGE_SIZE
from github_release_action.utils.helpers import first_line

from .exceptions import InsufficientTagsError
from .models import (
    Changelog,
    ChangelogBounds,
    ChangelogSource,
    CommitEntry,
    PullRequestEntry,
    TagCommitResolution,
    TagInfo,
    TagResolutionKind,
)
from .tags import commit_date

logger = structlog.get_logger(__name__)


def commit_entry_from_data(commit_data: dict[str, Any]) -> CommitEntry:
    """Build a changelog entry from raw commit data."""
    commit = commit_data.get("commit") or {}
    return CommitEntry(
        message=first_line(commit.get("message", "")),
        sha=commit_data.get("sha", ""),
        date=commit_date(commit_data),
    )


def merged_pull_request_entries(pull_requests: list[PullRequestSimple], since: datetime) -> list[PullRequestEntry]:
    """Keep pull requests merged strictly after ``since``, newest merge first."""
    entries = [
        PullRequestEntry(
            title=pr.title,
            author=pr.user.login if pr.user else "ghost",
            number=pr.number,
            url=pr.html_url,
            merged_at=pr.merged_at,
        )
        for pr in pull_requests
        if pr.merged_at is not None and pr.merged_at > since
    ]
    return sorted(entries, key=lambda entry: entry.merged_at, reverse=True)


class ChangelogBuilder:
    """Builds the release changelog for a pair of tags."""

    def __init__(self, adapter: GitHubClientBase) -> None:
        self.adapter = adapter

    async def resolve_tag_commit(self, tag: TagInfo) -> TagCommitResolution:
        """Resolve the commit a tag points at.

        Annotated tags are dereferenced through their tag object. When there is
        no tag object (a lightweight tag) the tag's own commit SHA is used.
        """
        if not tag.sha:
            return TagCommitResolution.unresolvable()
        try:
            tag_object = await self.adapter.get_tag(tag.sha)
        except (RequestFailed, ValueError):
            logger.info("Tag is not annotated, using commit SHA directly", tag=tag.name, sha=tag.sha)
            return TagCommitResolution.lightweight(tag.sha)
        return TagCommitResolution.annotated(tag_object.object_.sha)

    async def _resolved_commit_date(self, tag: TagInfo, sha: str) -> datetime:
        if sha == tag.sha and tag.date is not None:
            return tag.date
        date = commit_date(await self.adapter.get_commit(sha))
        if date is None:
            if tag.date is None:
                raise InsufficientTagsError(f"Could not determine the commit date of tag {tag.name}")
            return tag.date
        return date

    async def build(self, bounds: ChangelogBounds) -> Changelog:
        """Build the changelog for the given tag bounds."""
        if bounds.previous is None:
            logger.info("Only one valid tag found, listing all commits reachable from it", tag=bounds.latest.name)
            return await self.build_from_all_commits(bounds.latest)

        resolution = await self.resolve_tag_commit(bounds.previous)
        if resolution.kind == TagResolutionKind.UNRESOLVABLE or resolution.sha is None:
            raise InsufficientTagsError(f"Could not resolve the commit of tag {bounds.previous.name}")
        previous_sha = resolution.sha
        previous_date = await self._resolved_commit_date(bounds.previous, previous_sha)
        logger.info(
            "Resolved second to last tag",
            tag=bounds.previous.name,
            resolution=resolution.kind.value,
            sha=previous_sha,
            date=previous_date.isoformat(),
        )

        changelog = await self.build_from_pull_requests(previous_date)
        if changelog.entries:
            return changelog

        logger.info("No merged pull requests since second to last tag, falling back to commits", base=previous_sha, head=bounds.latest.sha)
        return await self.build_from_commit_range(previous_sha, bounds.latest.sha)

    async def build_from_pull_requests(self, since: datetime) -> Changelog:
        """List pull requests merged after ``since``."""
        pull_requests = await self.adapter.list_pull_requests(
            state="closed",
            sort="updated",
            direction="desc",
            per_page=PULL_REQUEST_PAGE_SIZE,
        )
        entries = merged_pull_request_entries(pull_requests, since)
        logger.info("Filtered merged pull requests", closed_pull_requests=len(pull_requests), merged_since_tag=len(entries))
        return Changelog(source=ChangelogSource.PULL_REQUESTS if entries else ChangelogSource.EMPTY, entries=list(entries))

    async def build_from_commit_range(self, base: str, head: str) -> Changelog:
        """List the commits after ``base`` up to and including ``head``, newest first."""
        comparison = await self.adapter.compare_commits(base, head)
        commits = [commit_entry_from_data(commit) for commit in reversed(comparison.get("commits", []))]
        return Changelog(source=ChangelogSource.COMMIT_RANGE if commits else ChangelogSource.EMPTY, entries=list(commits))

    async def build_from_all_commits(self, tag: TagInfo) -> Changelog:
        """List every commit reachable from ``tag``, newest first."""
        commits = [commit_entry_from_data(commit) for commit in await self.adapter.list_commits(sha=tag.sha)]
        return Changelog(source=ChangelogSource.ALL_COMMITS if commits else ChangelogSource.EMPTY, entries=list(commits))
