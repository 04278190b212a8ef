"""
Bcrypt Password Hasher - Implements PasswordHasherPort with bcrypt.

Digests use the modular crypt format ``$2b$<cost>$<salt><checksum>``, so
every digest carries its own algorithm, cost and salt. Raising the cost
never invalidates digests created with a lower one.
"""

import re
from dataclasses import dataclass

import bcrypt

from credkit.errors import InvalidInputError, MalformedDigestError
from credkit.ports.hasher_port import PasswordHasherPort

MIN_ROUNDS = 4
MAX_ROUNDS = 31
DEFAULT_ROUNDS = 12

# bcrypt only consumes the first 72 bytes of input
MAX_PASSWORD_BYTES = 72

_DIGEST_RE = re.compile(
    r"^\$(?P<algorithm>2[abxy]?)\$(?P<cost>\d{2})\$"
    r"(?P<salt>[./A-Za-z0-9]{22})(?P<checksum>[./A-Za-z0-9]{31})$"
)


@dataclass(frozen=True)
class DigestInfo:
    """Parsed view of a bcrypt digest."""
    algorithm: str
    cost: int
    salt: str
    checksum: str


def parse_digest(digest: str) -> DigestInfo:
    """
    Split a bcrypt digest into its parts.

    Args:
        digest: Digest string

    Returns:
        DigestInfo

    Raises:
        MalformedDigestError: If the digest is not a well-formed bcrypt string
    """
    if not isinstance(digest, str):
        raise MalformedDigestError("Digest must be a string")

    match = _DIGEST_RE.match(digest)
    if not match:
        raise MalformedDigestError("Digest is not in bcrypt format")

    cost = int(match.group("cost"))
    if not MIN_ROUNDS <= cost <= MAX_ROUNDS:
        raise MalformedDigestError(
            "Digest cost out of range",
            context={"cost": cost},
        )

    return DigestInfo(
        algorithm=match.group("algorithm"),
        cost=cost,
        salt=match.group("salt"),
        checksum=match.group("checksum"),
    )


def _encode(plaintext: str) -> bytes:
    if not isinstance(plaintext, str):
        raise InvalidInputError("Password must be a string")
    encoded = plaintext.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidInputError(
            f"Password exceeds {MAX_PASSWORD_BYTES} bytes",
            context={"max_bytes": MAX_PASSWORD_BYTES},
        )
    return encoded


class BcryptPasswordHasher(PasswordHasherPort):
    """
    bcrypt-based password hasher.

    Stateless apart from the configured cost; safe to share across threads.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize bcrypt hasher.

        Args:
            rounds: bcrypt cost factor (log2 of iterations), 4..31
        """
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ValueError(f"rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password with a freshly generated salt."""
        if not plaintext:
            raise InvalidInputError("Password must not be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("ascii")

    def verify(self, plaintext: str, digest: str) -> bool:
        """Verify a password in constant time against a stored digest."""
        parse_digest(digest)
        encoded = _encode(plaintext)
        if not encoded:
            return False

        try:
            return bcrypt.checkpw(encoded, digest.encode("ascii"))
        except ValueError as exc:
            raise MalformedDigestError("Digest rejected by bcrypt") from exc

    def needs_rehash(self, digest: str) -> bool:
        """True when the digest's cost is below the configured cost."""
        return parse_digest(digest).cost < self._rounds
