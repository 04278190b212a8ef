"""
credkit - Password hashing and session login kernel

Hexagonal architecture: the CredentialService talks to storage and time
only through ports, so any backend can sit behind it.

Usage:
    from credkit import CredentialService
    from credkit.adapters import (
        BcryptPasswordHasher, RedisUserStore, RedisSessionStore,
    )

    service = CredentialService(
        hasher=BcryptPasswordHasher(),
        users=RedisUserStore(),
        sessions=RedisSessionStore(),
    )

    # Register and log in
    service.register("alice", "correcthorse")
    token = service.authenticate("alice", "correcthorse")

    # On every later request
    username = service.validate_session(token.token_id)
"""

__version__ = "0.1.0"

from credkit.service.credential_service import CredentialService
from credkit.domain.credential import Credential
from credkit.domain.session import SessionToken
from credkit.domain.results import (
    AuthFailure,
    AuthFailureReason,
    SessionInvalid,
    SessionInvalidReason,
)
from credkit.errors import (
    CredkitError,
    InvalidInputError,
    MalformedDigestError,
    DuplicateUsernameError,
    StorageUnavailable,
)

__all__ = [
    "CredentialService",
    "Credential",
    "SessionToken",
    "AuthFailure",
    "AuthFailureReason",
    "SessionInvalid",
    "SessionInvalidReason",
    "CredkitError",
    "InvalidInputError",
    "MalformedDigestError",
    "DuplicateUsernameError",
    "StorageUnavailable",
]
