"""Contains utility functions for GitHub interactions."""

from github_release_action.utils.constants import TAG_REF_PREFIX


async def split_repository_in_configuration(repo: str | None) -> tuple[str, str]:
    """Splits the repository in the configuration into owner and repository."""
    if repo is None:
        raise ValueError("A repository in 'owner/repo' format is required.")
    repo = repo.strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no leading/trailing slashes or extra parts.")
    owner, repository = parts
    return owner, repository


def tag_ref(version: str) -> str:
    """Build the fully qualified git ref for a tag name."""
    return f"{TAG_REF_PREFIX}{version}"
