from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for errors reported back to a single client."""


class AuthorizationError(SyncError):
    """Presenter admission was refused (bad passphrase or slot taken)."""


class PermissionDeniedError(SyncError):
    """A non-presenter attempted a presenter-only mutation."""


class PayloadError(SyncError):
    """A frame or upload failed validation."""


class ArtifactTooLargeError(PayloadError):
    pass
