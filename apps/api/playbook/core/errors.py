"""Error kinds shared by the relational and search layers."""

from typing import Optional


class PlaybookError(Exception):
    """Base error for playbook operations."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class NotFoundError(PlaybookError):
    """Relational lookup miss (or an entity the requester may not see)."""


class ValidationError(PlaybookError):
    """Malformed filter, id or request body."""


class ExternalStoreUnavailableError(PlaybookError):
    """Search engine unreachable, or a required index is missing at boot."""


class SerializationError(PlaybookError):
    """A stored or returned document does not have the expected shape."""


class StoreError(PlaybookError):
    """Generic store failure (conflict or unknown engine error)."""
