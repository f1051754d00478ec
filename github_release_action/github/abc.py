"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from typing import Any, Literal


class GitHubClientBase(ABC):
    """Base ABC for GitHub clients."""

    # Tag/Ref Operations
    @abstractmethod
    async def list_tags(self, per_page: int = 100) -> list[Any]:
        """List all tags for a repository."""
        pass

    @abstractmethod
    async def create_tag_ref(self, tag_name: str, sha: str) -> Any:
        """Create a lightweight tag ref pointing at a commit."""
        pass

    @abstractmethod
    async def get_tag(self, tag_sha: str) -> Any:
        """Get an annotated tag object by its SHA."""
        pass

    # Commit Operations
    @abstractmethod
    async def get_commit(self, commit_sha: str) -> dict[str, Any]:
        """Get detailed information about a specific commit."""
        pass

    @abstractmethod
    async def compare_commits(self, base: str, head: str) -> dict[str, Any]:
        """Compare two commits."""
        pass

    @abstractmethod
    async def list_commits(self, sha: str | None = None, per_page: int = 100, **kwargs: Any) -> list[dict[str, Any]]:
        """List commits reachable from a SHA."""
        pass

    # Pull Request Operations
    @abstractmethod
    async def list_pull_requests(self, state: Literal["open", "closed", "all"] = "all", **kwargs: Any) -> list[Any]:
        """List pull requests for a repository."""
        pass

    # Release Operations
    @abstractmethod
    async def create_release(
        self,
        tag_name: str,
        name: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Create a release for a repository."""
        pass

    @abstractmethod
    async def upload_release_asset(
        self,
        release_id: int,
        name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upload_url: str | None = None,
    ) -> Any:
        """Upload an asset to a release."""
        pass
