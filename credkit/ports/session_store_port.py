"""
Session Store Port - Interface for session token persistence.

Implementations:
- MemorySessionStore: In-memory (testing only)
- RedisSessionStore: Redis-backed tokens
- DynamoDBSessionStore: DynamoDB-backed tokens

Stores return expired tokens as-is. Deciding expiry is the service's job.
"""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from credkit.domain.session import SessionToken


class SessionStorePort(ABC):
    """Port: Persist session tokens."""

    @abstractmethod
    def put(self, token: SessionToken) -> None:
        """
        Store a session token.

        Args:
            token: Token to store

        Raises:
            StorageUnavailable: If the backend cannot be reached
        """
        pass

    @abstractmethod
    def get(self, token_id: str) -> Optional[SessionToken]:
        """
        Get a token by ID.

        Args:
            token_id: Token ID

        Returns:
            Token if present (expired or not), None otherwise
        """
        pass

    @abstractmethod
    def delete(self, token_id: str) -> bool:
        """
        Delete a token.

        Args:
            token_id: Token ID

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def delete_by_username(self, username: str) -> int:
        """
        Delete every token belonging to a user.

        Args:
            username: Owner of the tokens

        Returns:
            Number of tokens deleted
        """
        pass

    @abstractmethod
    def cleanup_expired(self, now: datetime) -> int:
        """
        Delete tokens that expired at or before ``now``.

        Returns:
            Number of tokens deleted
        """
        pass
