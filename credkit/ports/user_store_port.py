"""
User Store Port - Interface for credential persistence.

Implementations:
- MemoryUserStore: In-memory (testing only)
- RedisUserStore: Redis hashes keyed by username
- DynamoDBUserStore: DynamoDB table keyed by username
"""

from abc import ABC, abstractmethod
from typing import Optional
from credkit.domain.credential import Credential


class UserStorePort(ABC):
    """Port: Persist and look up credentials."""

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[Credential]:
        """
        Look up a credential.

        Args:
            username: Login name

        Returns:
            Credential if found, None otherwise

        Raises:
            StorageUnavailable: If the backend cannot be reached
        """
        pass

    @abstractmethod
    def insert(self, credential: Credential) -> None:
        """
        Insert a new credential.

        Uniqueness must be enforced atomically by the store.

        Args:
            credential: Credential to insert

        Raises:
            DuplicateUsernameError: If the username is already taken
            StorageUnavailable: If the backend cannot be reached
        """
        pass

    @abstractmethod
    def update(self, credential: Credential, expected_digest: str) -> bool:
        """
        Replace the stored digest, but only if it still equals
        ``expected_digest`` (compare-and-set).

        Args:
            credential: Credential carrying the new digest
            expected_digest: Digest the caller verified against

        Returns:
            True if replaced, False if the credential is gone or its
            digest changed in the meantime

        Raises:
            StorageUnavailable: If the backend cannot be reached
        """
        pass
