"""Data models for release publishing."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from github_release_action.utils.helpers import short_sha


@dataclass
class TagInfo:
    """A repository tag and the date of the commit it points at."""

    name: str
    sha: str
    date: datetime | None = None


class TagResolutionKind(str, Enum):
    """How a tag was resolved to the commit it targets."""

    ANNOTATED = "annotated"
    LIGHTWEIGHT = "lightweight"
    UNRESOLVABLE = "unresolvable"


@dataclass
class TagCommitResolution:
    """Result of resolving a tag to its underlying commit SHA."""

    kind: TagResolutionKind
    sha: str | None = None

    @classmethod
    def annotated(cls, sha: str) -> "TagCommitResolution":
        return cls(kind=TagResolutionKind.ANNOTATED, sha=sha)

    @classmethod
    def lightweight(cls, sha: str) -> "TagCommitResolution":
        return cls(kind=TagResolutionKind.LIGHTWEIGHT, sha=sha)

    @classmethod
    def unresolvable(cls) -> "TagCommitResolution":
        return cls(kind=TagResolutionKind.UNRESOLVABLE)


@dataclass
class PullRequestEntry:
    """A merged pull request listed in the changelog."""

    title: str
    author: str
    number: int
    url: str
    merged_at: datetime

    def render(self) -> str:
        return f"- {self.title} by @{self.author} in [#{self.number}]({self.url})"


@dataclass
class CommitEntry:
    """A commit listed in the changelog when no pull requests qualify."""

    message: str
    sha: str
    date: datetime | None = None

    def render(self) -> str:
        return f"- {self.message} ({short_sha(self.sha)})"


class ChangelogSource(str, Enum):
    """Where the changelog lines were taken from."""

    PULL_REQUESTS = "pull_requests"
    COMMIT_RANGE = "commit_range"
    ALL_COMMITS = "all_commits"
    EMPTY = "empty"


@dataclass
class Changelog:
    """A rendered changelog and the entries it was built from."""

    source: ChangelogSource
    entries: list[PullRequestEntry | CommitEntry] = field(default_factory=list)

    def render(self) -> str:
        return "\n".join(entry.render() for entry in self.entries)


@dataclass
class ChangelogBounds:
    """The tags delimiting the changelog range."""

    latest: TagInfo
    previous: TagInfo | None = None


class AssetOutcome(str, Enum):
    """Outcome of attaching a single asset."""

    ATTACHED = "attached"
    SKIPPED = "skipped"
    FAILED = "failed"


class AssetResult(BaseModel):
    """Result of attaching a single asset to a release."""

    path: str
    name: str
    outcome: AssetOutcome
    reason: str | None = None


class AttachmentReport(BaseModel):
    """Ordered results of attaching every requested asset."""

    results: list[AssetResult] = []

    @property
    def attached(self) -> list[AssetResult]:
        return [r for r in self.results if r.outcome == AssetOutcome.ATTACHED]

    @property
    def warnings(self) -> list[AssetResult]:
        return [r for r in self.results if r.outcome != AssetOutcome.ATTACHED]


class ReleaseStatus(str, Enum):
    """Status of a release run."""

    SUCCESS = "success"
    ERROR = "error"


class ReleaseResult(BaseModel):
    """Result of a release run."""

    status: ReleaseStatus
    version: str
    tag_created: bool = False
    release_id: int | None = None
    release_url: str | None = None
    changelog: str = ""
    changelog_source: ChangelogSource = ChangelogSource.EMPTY
    assets: AttachmentReport = Field(default_factory=AttachmentReport)
    notified: bool = False
    error: str | None = None


class NotificationContext(BaseModel):
    """Values available to notification templates."""

    name: str
    version: str
    changelog: str
    release_url: str | None = None
