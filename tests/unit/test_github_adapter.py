"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from github_release_action.github.adapter import GitHubKitAdapter


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, parsed_data: Any = None, json_data: Any = None) -> None:
        """Initialize the dummy response with parsed and raw data."""
        self.status_code: int = 200
        self.parsed_data = parsed_data if parsed_data is not None else MagicMock()
        self._json_data = json_data

    def json(self) -> Any:
        """Return the raw JSON payload."""
        return self._json_data


def _adapter() -> GitHubKitAdapter:
    return GitHubKitAdapter(MagicMock(), "owner", "repo")


@pytest.mark.asyncio
async def test_list_tags_paginates() -> None:
    """Test that list_tags keeps requesting pages until a short page is returned."""
    adapter = _adapter()
    adapter.client.rest.repos.async_list_tags = AsyncMock(
        side_effect=[DummyResponse(parsed_data=["t1", "t2"]), DummyResponse(parsed_data=["t3"])]
    )
    tags = await adapter.list_tags(per_page=2)
    assert tags == ["t1", "t2", "t3"]
    pages = [call.kwargs["page"] for call in adapter.client.rest.repos.async_list_tags.await_args_list]
    assert pages == [1, 2]


@pytest.mark.asyncio
async def test_create_tag_ref_uses_tags_namespace() -> None:
    """Test that tag refs are created under refs/tags/."""
    adapter = _adapter()
    adapter.client.rest.git.async_create_ref = AsyncMock(return_value=DummyResponse())
    await adapter.create_tag_ref("v1.2.3", "abc123")
    adapter.client.rest.git.async_create_ref.assert_awaited_once_with(owner="owner", repo="repo", ref="refs/tags/v1.2.3", sha="abc123")


@pytest.mark.asyncio
async def test_create_tag_ref_422_raises_value_error(make_request_failed: Callable[..., Exception]) -> None:
    """Test that a 422 (e.g. reference already exists) is converted to a ValueError."""
    adapter = _adapter()
    adapter.client.rest.git.async_create_ref = AsyncMock(side_effect=make_request_failed(422, "Reference already exists"))
    with pytest.raises(ValueError, match="Reference already exists"):
        await adapter.create_tag_ref("v1.2.3", "abc123")


@pytest.mark.asyncio
async def test_get_tag_propagates_not_found(make_request_failed: Callable[..., Exception]) -> None:
    """Test that a missing tag object is raised to the caller."""
    adapter = _adapter()
    error = make_request_failed(404, "Not Found")
    adapter.client.rest.git.async_get_tag = AsyncMock(side_effect=error)
    with pytest.raises(type(error)):
        await adapter.get_tag("abc123")


@pytest.mark.asyncio
async def test_get_commit_returns_raw_json() -> None:
    """Test that get_commit returns the raw JSON payload."""
    adapter = _adapter()
    payload = {"sha": "abc", "commit": {"message": "m"}}
    adapter.client.rest.repos.async_get_commit = AsyncMock(return_value=DummyResponse(json_data=payload))
    assert await adapter.get_commit("abc") == payload
    adapter.client.rest.repos.async_get_commit.assert_awaited_once_with(owner="owner", repo="repo", ref="abc")


@pytest.mark.asyncio
async def test_compare_commits_collects_all_pages() -> None:
    """Test that commits of every comparison page are merged."""
    adapter = _adapter()
    adapter.client.rest.repos.async_compare_commits = AsyncMock(
        side_effect=[
            DummyResponse(json_data={"status": "ahead", "commits": [{"sha": "1"}, {"sha": "2"}]}),
            DummyResponse(json_data={"status": "ahead", "commits": [{"sha": "3"}]}),
        ]
    )
    comparison = await adapter.compare_commits("base", "head", per_page=2)
    assert [c["sha"] for c in comparison["commits"]] == ["1", "2", "3"]
    assert comparison["status"] == "ahead"
    assert adapter.client.rest.repos.async_compare_commits.await_args_list[0].kwargs["basehead"] == "base...head"


@pytest.mark.asyncio
async def test_list_commits_omits_null_sha() -> None:
    """Test that list_commits only passes a SHA when given one."""
    adapter = _adapter()
    adapter.client.rest.repos.async_list_commits = AsyncMock(return_value=DummyResponse(json_data=[]))
    assert await adapter.list_commits() == []
    assert "sha" not in adapter.client.rest.repos.async_list_commits.await_args.kwargs


@pytest.mark.asyncio
async def test_list_pull_requests_single_page() -> None:
    """Test that pull requests are fetched with the requested filters."""
    adapter = _adapter()
    adapter.client.rest.pulls.async_list = AsyncMock(return_value=DummyResponse(parsed_data=["pr"]))
    prs = await adapter.list_pull_requests(state="closed", sort="updated", direction="desc")
    assert prs == ["pr"]
    adapter.client.rest.pulls.async_list.assert_awaited_once_with(
        owner="owner", repo="repo", state="closed", per_page=100, sort="updated", direction="desc"
    )


@pytest.mark.asyncio
async def test_create_release() -> None:
    """Test that create_release forwards the release attributes."""
    adapter = _adapter()
    release = MagicMock(id=7, html_url="https://github.com/owner/repo/releases/tag/v1")
    adapter.client.rest.repos.async_create_release = AsyncMock(return_value=DummyResponse(parsed_data=release))
    assert await adapter.create_release(tag_name="v1", name="Release v1", body="notes") is release
    adapter.client.rest.repos.async_create_release.assert_awaited_once_with(
        owner="owner", repo="repo", tag_name="v1", draft=False, prerelease=False, name="Release v1", body="notes"
    )


@pytest.mark.asyncio
async def test_upload_release_asset_uses_upload_url() -> None:
    """Test that the release upload URL is used with its query template stripped."""
    adapter = _adapter()
    adapter.client.arequest = AsyncMock(return_value=DummyResponse())
    await adapter.upload_release_asset(
        release_id=7,
        name="a.txt",
        data=b"data",
        content_type="text/plain",
        upload_url="https://uploads.github.com/repos/owner/repo/releases/7/assets{?name,label}",
    )
    args = adapter.client.arequest.await_args
    assert args.args == ("POST", "https://uploads.github.com/repos/owner/repo/releases/7/assets")
    assert args.kwargs["params"] == {"name": "a.txt"}
    assert args.kwargs["content"] == b"data"
    assert args.kwargs["headers"] == {"Content-Type": "text/plain"}


@pytest.mark.asyncio
async def test_upload_release_asset_without_upload_url() -> None:
    """Test that the REST endpoint is used when no upload URL is known."""
    adapter = _adapter()
    adapter.client.rest.repos.async_upload_release_asset = AsyncMock(return_value=DummyResponse())
    await adapter.upload_release_asset(release_id=7, name="a.bin", data=b"x")
    kwargs = adapter.client.rest.repos.async_upload_release_asset.await_args.kwargs
    assert kwargs["release_id"] == 7
    assert kwargs["name"] == "a.bin"
    assert kwargs["content"] == b"x"


@pytest.mark.asyncio
async def test_create_builds_token_client() -> None:
    """Test that the factory splits the repository and authenticates with the token."""
    with patch("github_release_action.github.adapter.get_github_token_client", new=AsyncMock(return_value="client")) as mock_client:
        adapter = await GitHubKitAdapter.create(repo="octocat/hello-world", github_token="token", rate_limit_retries=3)
    mock_client.assert_awaited_once_with(github_token="token", github_api_url="https://api.github.com")
    assert (adapter.owner, adapter.repo_name, adapter.client, adapter.rate_limit_retries) == ("octocat", "hello-world", "client", 3)
