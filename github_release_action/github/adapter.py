"""GitHub client adapter for the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Literal, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import GitRef, GitTag, PullRequestSimple, Release, ReleaseAsset, Tag

from github_release_action.utils.constants import DEFAULT_PER_PAGE
from github_release_action.utils.github import split_repository_in_configuration, tag_ref
from github_release_action.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_token_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
                raise ValueError(
                    f"GitHub 422 error in {func.__name__}: {message} | errors: {errors} | url: {getattr(exc.response, 'url', None)}"
                ) from exc
            raise

    return wrapper  # type: ignore


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str, rate_limit_retries: int = 0) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name
        self.rate_limit_retries = rate_limit_retries

    def _omit_null_parameters(self, **kwargs: Any) -> dict[str, Any]:
        """Omit parameters that are None."""
        return {k: v for k, v in kwargs.items() if v is not None}

    @classmethod
    async def create(
        cls,
        repo: str,
        github_token: str,
        github_api_url: str = "https://api.github.com",
        rate_limit_retries: int = 0,
    ) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token used to authenticate (PAT or workflow token)
            github_api_url: GitHub API URL (defaults to https://api.github.com)
            rate_limit_retries: How many times rate-limited calls are retried

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = await split_repository_in_configuration(repo=repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_token_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name, rate_limit_retries=rate_limit_retries)

    # Tag/Ref Operations
    @retry_on_rate_limit()
    async def list_tags(self, per_page: int = DEFAULT_PER_PAGE) -> list[Tag]:
        """List all tags for a repository, handling pagination."""
        all_tags: list[Tag] = []
        page: int = 1
        while True:
            logger.debug(f"Fetching tags page {page}")
            response: Response[list[Tag]] = await self.client.rest.repos.async_list_tags(
                owner=self.owner,
                repo=self.repo_name,
                per_page=per_page,
                page=page,
            )
            tags: list[Tag] = response.parsed_data
            if not tags:
                break
            all_tags.extend(tags)
            if len(tags) < per_page:
                break
            page += 1
        logger.info("Fetched all tags", owner=self.owner, repo=self.repo_name, total_tags=len(all_tags))
        return all_tags

    @handle_github_422
    @retry_on_rate_limit()
    async def create_tag_ref(self, tag_name: str, sha: str) -> GitRef:
        """Create a lightweight tag ref pointing at a commit."""
        ref = tag_ref(tag_name)
        response: Response[GitRef] = await self.client.rest.git.async_create_ref(
            owner=self.owner,
            repo=self.repo_name,
            ref=ref,
            sha=sha,
        )
        logger.info("Created tag ref", ref=ref, sha=sha)
        return response.parsed_data

    @retry_on_rate_limit()
    async def get_tag(self, tag_sha: str) -> GitTag:
        """Get an annotated tag object by its SHA.

        Lightweight tags have no tag object, so GitHub answers with 404 for them.
        """
        response: Response[GitTag] = await self.client.rest.git.async_get_tag(
            owner=self.owner,
            repo=self.repo_name,
            tag_sha=tag_sha,
        )
        return response.parsed_data

    # Commit Operations
    @handle_github_422
    @retry_on_rate_limit()
    async def get_commit(self, commit_sha: str) -> dict[str, Any]:
        """Get a commit by SHA.

        Returns the raw commit data as a dictionary instead of a Commit model,
        since githubkit's Commit model fails validation on the verification
        field GitHub returns for this endpoint.
        """
        response = await self.client.rest.repos.async_get_commit(owner=self.owner, repo=self.repo_name, ref=commit_sha)
        return response.json()

    @handle_github_422
    @retry_on_rate_limit()
    async def compare_commits(self, base: str, head: str, per_page: int = DEFAULT_PER_PAGE) -> dict[str, Any]:
        """Compare two commits, collecting every commit of the range across pages.

        Returns the raw comparison of the first page with its ``commits`` list
        replaced by the commits of all pages (oldest first, as GitHub orders them).
        """
        comparison: dict[str, Any] = {}
        all_commits: list[dict[str, Any]] = []
        page: int = 1
        while True:
            logger.debug(f"Fetching comparison page {page}", base=base, head=head)
            response = await self.client.rest.repos.async_compare_commits(
                owner=self.owner,
                repo=self.repo_name,
                basehead=f"{base}...{head}",
                per_page=per_page,
                page=page,
            )
            data: dict[str, Any] = response.json()
            if not comparison:
                comparison = data
            commits: list[dict[str, Any]] = data.get("commits", [])
            all_commits.extend(commits)
            if len(commits) < per_page:
                break
            page += 1
        comparison["commits"] = all_commits
        logger.info("Compared commits", base=base, head=head, total_commits=len(all_commits))
        return comparison

    @retry_on_rate_limit()
    async def list_commits(self, sha: str | None = None, per_page: int = DEFAULT_PER_PAGE, **kwargs: Any) -> list[dict[str, Any]]:
        """List commits reachable from a SHA, handling pagination.

        Args:
            sha: SHA, tag, or branch to start listing commits from (default: default branch)
            per_page: Number of commits per page (default: 100, max: 100)
            **kwargs: Additional parameters to pass to the API

        Returns:
            List of raw commit dictionaries, newest first
        """
        all_commits: list[dict[str, Any]] = []
        page: int = 1
        logger.info("Fetching commits for repository", owner=self.owner, repo=self.repo_name, sha=sha)
        while True:
            logger.debug(f"Fetching commits page {page}")
            params = self._omit_null_parameters(sha=sha, per_page=per_page, page=page, **kwargs)
            response = await self.client.rest.repos.async_list_commits(owner=self.owner, repo=self.repo_name, **params)
            commits: list[dict[str, Any]] = response.json()
            if not commits:
                break
            all_commits.extend(commits)
            if len(commits) < per_page:
                break
            page += 1
        logger.info("Fetched all commits", owner=self.owner, repo=self.repo_name, total_commits=len(all_commits))
        return all_commits

    # Pull Request Operations
    @retry_on_rate_limit()
    async def list_pull_requests(
        self,
        state: Literal["open", "closed", "all"] = "all",
        per_page: int = DEFAULT_PER_PAGE,
        **kwargs: Any,
    ) -> list[PullRequestSimple]:
        """List a single page of pull requests for a repository.

        Only the first page is requested; callers narrow the result with the
        ``sort`` and ``direction`` parameters.
        """
        response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
            owner=self.owner,
            repo=self.repo_name,
            state=state,
            per_page=per_page,
            **kwargs,
        )
        pull_requests = response.parsed_data
        logger.debug("Fetched pull requests", state=state, total_pull_requests=len(pull_requests))
        return pull_requests

    # Release Operations
    @handle_github_422
    @retry_on_rate_limit()
    async def create_release(
        self,
        tag_name: str,
        name: str | None = None,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
        **kwargs: Any,
    ) -> Release:
        """Create a release for a repository."""
        params = self._omit_null_parameters(name=name, body=body, **kwargs)
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner,
            repo=self.repo_name,
            tag_name=tag_name,
            draft=draft,
            prerelease=prerelease,
            **params,
        )
        release = response.parsed_data
        logger.info("Created release", tag_name=tag_name, release_id=release.id, url=release.html_url)
        return release

    @handle_github_422
    @retry_on_rate_limit()
    async def upload_release_asset(
        self,
        release_id: int,
        name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upload_url: str | None = None,
    ) -> ReleaseAsset:
        """Upload an asset to a release.

        When the release's ``upload_url`` is known it is used directly, since
        asset uploads are served from a different host than the REST API.
        """
        headers = {"Content-Type": content_type}
        if upload_url:
            # Strip the RFC 6570 query template, e.g. "{?name,label}"
            url = upload_url.split("{", 1)[0]
            response: Response[ReleaseAsset] = await self.client.arequest(
                "POST",
                url,
                params={"name": name},
                content=data,
                headers=headers,
                response_model=ReleaseAsset,
            )
        else:
            response = await self.client.rest.repos.async_upload_release_asset(
                owner=self.owner,
                repo=self.repo_name,
                release_id=release_id,
                name=name,
                content=data,
                headers=headers,
            )
        logger.info("Uploaded release asset", release_id=release_id, name=name, size=len(data))
        return response.parsed_data
