"""
Session Domain Model - Represents an issued session token.
"""

from dataclasses import dataclass
from typing import Dict, Any
from datetime import datetime, timedelta
import secrets

# 16 bytes = 128 bits of entropy
MIN_TOKEN_BYTES = 16
DEFAULT_TOKEN_BYTES = 32


@dataclass(frozen=True)
class SessionToken:
    """
    Session token - proof of a successful login.

    Domain rules:
    - token_id is cryptographically random (>= 128 bits)
    - token_id is distinct from the user's permanent identity
    - a token is expired once expires_at <= now
    """
    token_id: str
    username: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def issue(
        cls,
        username: str,
        ttl: int,
        now: datetime,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ) -> "SessionToken":
        """
        Mint a new token with a random ID.

        Args:
            username: User the session belongs to
            ttl: Time-to-live in seconds
            now: Issue timestamp (from the injected clock)
            token_bytes: Random bytes behind the token ID

        Returns:
            New session token
        """
        if token_bytes < MIN_TOKEN_BYTES:
            raise ValueError(f"token_bytes must be at least {MIN_TOKEN_BYTES}")
        if ttl <= 0:
            raise ValueError("ttl must be positive")

        return cls(
            token_id=secrets.token_urlsafe(token_bytes),
            username=username,
            issued_at=now,
            expires_at=now + timedelta(seconds=ttl),
        )

    def is_expired(self, now: datetime) -> bool:
        """Check whether the token has expired at ``now``."""
        return self.expires_at <= now

    @property
    def ttl_seconds(self) -> int:
        """Lifetime the token was issued with, in whole seconds."""
        return int((self.expires_at - self.issued_at).total_seconds())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "token_id": self.token_id,
            "username": self.username,
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionToken":
        """Deserialize from dict."""
        return cls(
            token_id=data["token_id"],
            username=data["username"],
            issued_at=datetime.fromisoformat(data["issued_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )
