"""Fixtures for unit tests."""

from types import SimpleNamespace
from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog
from githubkit.exception import RequestFailed

from github_release_action.configuration.models import ReleaseConfig
from github_release_action.github.abc import GitHubClientBase


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_adapter() -> MagicMock:
    """A GitHub adapter whose API operations are all AsyncMocks."""
    adapter = MagicMock(spec=GitHubClientBase)
    adapter.list_tags = AsyncMock(return_value=[])
    adapter.create_tag_ref = AsyncMock()
    adapter.get_tag = AsyncMock()
    adapter.get_commit = AsyncMock()
    adapter.compare_commits = AsyncMock(return_value={"commits": []})
    adapter.list_commits = AsyncMock(return_value=[])
    adapter.list_pull_requests = AsyncMock(return_value=[])
    adapter.create_release = AsyncMock(
        return_value=SimpleNamespace(
            id=42,
            html_url="https://github.com/octocat/hello-world/releases/tag/v1.1.0",
            upload_url="https://uploads.github.com/repos/octocat/hello-world/releases/42/assets{?name,label}",
        )
    )
    adapter.upload_release_asset = AsyncMock()
    return adapter


class FakeRequestFailed(RequestFailed):
    """RequestFailed built from a mocked response, with a readable message."""

    def __init__(self, status_code: int, message: str, headers: dict[str, str]) -> None:
        """Build the error without a real HTTP exchange."""
        Exception.__init__(self, message)
        self.message = message
        self.response = MagicMock(status_code=status_code, headers=headers)
        self.response.json.return_value = {"message": message, "errors": []}
        self.request = self.response.raw_request

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    __repr__ = __str__


@pytest.fixture
def make_request_failed() -> Callable[..., RequestFailed]:
    """Factory for githubkit RequestFailed errors with a given status code."""

    def _make(status_code: int, message: str = "Request failed", headers: dict[str, str] | None = None) -> RequestFailed:
        return FakeRequestFailed(status_code, message, headers or {})

    return _make


@pytest.fixture
def make_commit() -> Callable[..., dict[str, Any]]:
    """Factory for raw commit payloads as returned by the GitHub REST API."""

    def _make(sha: str, date: str | None = "2024-01-01T00:00:00Z", message: str = "Commit message") -> dict[str, Any]:
        committer = {"name": "Octocat", "date": date} if date is not None else {"name": "Octocat"}
        return {"sha": sha, "commit": {"message": message, "committer": committer, "author": {"name": "Octocat"}}}

    return _make


@pytest.fixture
def release_config() -> ReleaseConfig:
    """A minimal release configuration."""
    return ReleaseConfig(
        github_token="token",
        repo="octocat/hello-world",
        sha="headsha1234567",
        version="v1.1.0",
        name="hello-world",
    )
