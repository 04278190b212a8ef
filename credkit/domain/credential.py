"""
Credential Domain Model - Stored password credential.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from datetime import datetime


@dataclass
class Credential:
    """
    Credential entity - a username bound to a password digest.

    Domain rules:
    - username is unique (enforced by the user store) and immutable
    - password_digest is never the plaintext
    - password_digest is only replaced by an explicit password change
      or a transparent cost upgrade
    """
    username: str
    password_digest: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, username: str, password_digest: str, now: datetime) -> "Credential":
        """
        Create a new credential.

        Args:
            username: Unique login name
            password_digest: Digest produced by a password hasher
            now: Creation timestamp (from the injected clock)

        Returns:
            New credential instance
        """
        return cls(
            username=username,
            password_digest=password_digest,
            created_at=now,
        )

    def with_digest(self, password_digest: str, now: datetime) -> "Credential":
        """Return a copy carrying a replacement digest."""
        return Credential(
            username=self.username,
            password_digest=password_digest,
            created_at=self.created_at,
            updated_at=now,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "username": self.username,
            "password_digest": self.password_digest,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        """Deserialize from dict."""
        return cls(
            username=data["username"],
            password_digest=data["password_digest"],
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None,
        )
