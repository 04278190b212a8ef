"""
Service layer - the credential kernel's public operations.
"""

from credkit.service.credential_service import (
    AuthResult,
    CredentialService,
    SessionResult,
)

__all__ = [
    "AuthResult",
    "CredentialService",
    "SessionResult",
]
