"""General utility functions and helper classes."""

import re
from datetime import datetime

from github_release_action.utils.constants import SHORT_SHA_LENGTH


def split_delimited_paths(value: str | None) -> list[str]:
    """Split a comma and/or newline separated list of paths.

    Surrounding whitespace is trimmed, blank entries are dropped, and duplicate
    entries are removed while preserving the first occurrence.
    """
    if not value:
        return []
    paths: list[str] = []
    for part in re.split(r"[,\n]", value):
        path = part.strip()
        if path and path not in paths:
            paths.append(path)
    return paths


def first_line(message: str) -> str:
    """Return the first line of a (commit) message."""
    return message.splitlines()[0].strip() if message else ""


def short_sha(sha: str) -> str:
    """Return the abbreviated form of a commit SHA."""
    return sha[:SHORT_SHA_LENGTH]


def parse_github_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 timestamp as returned by the GitHub API."""
    if value is None or isinstance(value, datetime):
        return value
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
