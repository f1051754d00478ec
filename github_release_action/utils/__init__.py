"""Utility modules for shared functionality."""

from .constants import (
    AQUASEC_REPORT_PATH,
    DEFAULT_RELEASE_NAME_TEMPLATE,
    SHORT_SHA_LENGTH,
    TAG_REF_PREFIX,
)
from .retry import retry_on_rate_limit

__all__ = [
    "AQUASEC_REPORT_PATH",
    "DEFAULT_RELEASE_NAME_TEMPLATE",
    "SHORT_SHA_LENGTH",
    "TAG_REF_PREFIX",
    "retry_on_rate_limit",
]
