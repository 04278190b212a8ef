"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from credkit.domain.credential import Credential
from credkit.domain.session import SessionToken
from credkit.domain.results import (
    AuthFailure,
    AuthFailureReason,
    SessionInvalid,
    SessionInvalidReason,
)

__all__ = [
    "Credential",
    "SessionToken",
    "AuthFailure",
    "AuthFailureReason",
    "SessionInvalid",
    "SessionInvalidReason",
]
