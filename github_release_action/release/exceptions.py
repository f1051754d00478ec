"""Custom exceptions for the release workflow."""


class ReleaseActionError(Exception):
    """Base class for errors raised while publishing a release."""

    pass


class InsufficientTagsError(ReleaseActionError):
    """Raised when no dated tag is available to build a changelog from."""

    pass


class RefCreationError(ReleaseActionError):
    """Raised when the tag ref for the requested version cannot be created."""

    def __init__(self, ref: str, sha: str, reason: str) -> None:
        super().__init__(f"Failed to create ref {ref} at {sha}: {reason}")
        self.ref = ref
        self.sha = sha
        self.reason = reason


class AssetAttachError(ReleaseActionError):
    """Raised when a single asset cannot be uploaded to a release."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to attach asset {path}: {reason}")
        self.path = path
        self.reason = reason


class NotificationError(ReleaseActionError):
    """Raised when the chat webhook notification cannot be delivered."""

    pass
