"""
Password Hasher Port - Interface for one-way password hashing.

Implementations:
- BcryptPasswordHasher: bcrypt with tunable cost
"""

from abc import ABC, abstractmethod


class PasswordHasherPort(ABC):
    """Port: Hash and verify passwords."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password with a fresh random salt.

        Args:
            plaintext: Password to hash

        Returns:
            Self-describing digest (algorithm, cost, salt and output)

        Raises:
            InvalidInputError: If plaintext is empty or too long
        """
        pass

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Verify a plaintext password against a stored digest.

        Args:
            plaintext: Candidate password
            digest: Digest previously returned by hash()

        Returns:
            True only on an exact match

        Raises:
            MalformedDigestError: If the digest cannot be parsed
        """
        pass

    @abstractmethod
    def needs_rehash(self, digest: str) -> bool:
        """
        Check whether a digest was produced with weaker parameters
        than the hasher is currently configured for.

        Args:
            digest: Stored digest

        Returns:
            True if the digest should be replaced on next successful login

        Raises:
            MalformedDigestError: If the digest cannot be parsed
        """
        pass
