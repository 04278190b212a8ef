"""
Outcome values for expected, non-exceptional failures.

Rejected logins and dead sessions are normal control flow, so they are
returned rather than raised.
"""

from dataclasses import dataclass
from enum import Enum


class AuthFailureReason(Enum):
    """Why a login attempt was rejected."""
    USER_NOT_FOUND = "user_not_found"
    BAD_PASSWORD = "bad_password"


class SessionInvalidReason(Enum):
    """Why a session token no longer resolves to a user."""
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


@dataclass(frozen=True)
class AuthFailure:
    """
    Rejected login.

    The reason is for logs and tests only. Callers must present both
    reasons as the same generic rejection.
    """
    reason: AuthFailureReason

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class SessionInvalid:
    """Session token that must be treated as logged out."""
    reason: SessionInvalidReason

    def __bool__(self) -> bool:
        return False
