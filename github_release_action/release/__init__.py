"""Release publishing module."""

from .assets import AssetAttacher
from .changelog import ChangelogBuilder
from .exceptions import (
    AssetAttachError,
    InsufficientTagsError,
    NotificationError,
    RefCreationError,
    ReleaseActionError,
)
from .models import (
    AssetOutcome,
    AssetResult,
    AttachmentReport,
    Changelog,
    ChangelogSource,
    ReleaseResult,
    ReleaseStatus,
    TagCommitResolution,
    TagInfo,
)
from .notifier import WebhookNotifier
from .orchestrator import ReleaseOrchestrator, run_release_workflow
from .publisher import ReleasePublisher
from .tags import TagResolver

__all__ = [
    "ReleaseActionError",
    "InsufficientTagsError",
    "RefCreationError",
    "AssetAttachError",
    "NotificationError",
    "TagInfo",
    "TagCommitResolution",
    "Changelog",
    "ChangelogSource",
    "AssetOutcome",
    "AssetResult",
    "AttachmentReport",
    "ReleaseResult",
    "ReleaseStatus",
    "TagResolver",
    "ChangelogBuilder",
    "ReleasePublisher",
    "AssetAttacher",
    "WebhookNotifier",
    "ReleaseOrchestrator",
    "run_release_workflow",
]
