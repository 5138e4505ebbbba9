"""Core configuration, auth, errors, and shared infrastructure."""

from playbook.core.config import Settings, get_settings
from playbook.core.auth import (
    verify_password,
    hash_password,
    create_access_token,
    decode_access_token,
    token_from_request,
)
from playbook.core.errors import (
    PlaybookError,
    NotFoundError,
    ValidationError,
    ExternalStoreUnavailableError,
    SerializationError,
    StoreError,
)
from playbook.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_access_token",
    "token_from_request",
    "PlaybookError",
    "NotFoundError",
    "ValidationError",
    "ExternalStoreUnavailableError",
    "SerializationError",
    "StoreError",
    "limiter",
]
