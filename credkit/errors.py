"""
Error taxonomy for the credential kernel.

Every error carries a stable ``code`` that callers can map to a response
without parsing messages.
"""

from typing import Any, Dict, Mapping, Optional


class CredkitError(Exception):
    """Base class for all kernel errors."""

    code: str = "credkit_error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message or self.code)
        self.context = dict(context) if context else {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to an error payload."""
        payload: Dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class InvalidInputError(CredkitError):
    """Empty or malformed input. A caller bug, surfaced immediately."""

    code = "invalid_input"


class MalformedDigestError(CredkitError):
    """Stored digest cannot be parsed. Never treated as a mismatch."""

    code = "malformed_digest"


class DuplicateUsernameError(CredkitError):
    """Username already registered."""

    code = "duplicate_username"

    def __init__(self, username: str):
        super().__init__(
            f"Username already registered: {username}",
            context={"username": username},
        )
        self.username = username


class StorageUnavailable(CredkitError):
    """Backing store failed. The kernel performs no retries."""

    code = "storage_unavailable"

    def __init__(self, backend: str, operation: str):
        super().__init__(
            f"{backend} unavailable during {operation}",
            context={"backend": backend, "operation": operation},
        )
        self.backend = backend
        self.operation = operation


__all__ = [
    "CredkitError",
    "InvalidInputError",
    "MalformedDigestError",
    "DuplicateUsernameError",
    "StorageUnavailable",
]
