"""
Unit tests for the bcrypt password hasher.
"""

import pytest
from credkit.adapters.bcrypt_hasher import (
    BcryptPasswordHasher,
    MAX_PASSWORD_BYTES,
    parse_digest,
)
from credkit.errors import InvalidInputError, MalformedDigestError


def test_hash_then_verify(hasher):
    """Test that a password verifies against its own digest."""
    for password in ["correcthorse", "p", "pässwörd", "spaces in here", "x" * MAX_PASSWORD_BYTES]:
        assert hasher.verify(password, hasher.hash(password))


def test_digest_is_not_plaintext(hasher):
    """Test that the digest never contains the password."""
    digest = hasher.hash("correcthorse")
    assert "correcthorse" not in digest
    assert digest.startswith("$2b$04$")


def test_fresh_salt_per_hash(hasher):
    """Test that hashing twice gives different digests that both verify."""
    first = hasher.hash("correcthorse")
    second = hasher.hash("correcthorse")

    assert first != second
    assert parse_digest(first).salt != parse_digest(second).salt
    assert hasher.verify("correcthorse", first)
    assert hasher.verify("correcthorse", second)


def test_distinct_passwords_do_not_verify(hasher):
    """Test a fixed sample of distinct inputs against each other's digests."""
    passwords = [f"password-{i}" for i in range(40)]
    digests = [hasher.hash(p) for p in passwords]

    for i, digest in enumerate(digests):
        other = passwords[(i + 1) % len(passwords)]
        assert not hasher.verify(other, digest)


def test_hash_rejects_empty(hasher):
    """Test that an empty password cannot be hashed."""
    with pytest.raises(InvalidInputError):
        hasher.hash("")


def test_hash_rejects_oversized(hasher):
    """Test that passwords beyond bcrypt's input limit are refused."""
    with pytest.raises(InvalidInputError):
        hasher.hash("x" * (MAX_PASSWORD_BYTES + 1))


def test_verify_empty_password_is_false(hasher):
    """Test that an empty candidate never matches."""
    assert hasher.verify("", hasher.hash("correcthorse")) is False


@pytest.mark.parametrize("digest", [
    "",
    "not-a-digest",
    "$2b$04$tooshort",
    "$1$04$abcdefghijklmnopqrstuuAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA",
    "$2b$99$abcdefghijklmnopqrstuuAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA",
])
def test_verify_malformed_digest(hasher, digest):
    """Test that unparseable digests raise instead of reporting a mismatch."""
    with pytest.raises(MalformedDigestError):
        hasher.verify("correcthorse", digest)


def test_verify_non_string_digest(hasher):
    """Test that a non-string digest is reported as malformed."""
    with pytest.raises(MalformedDigestError):
        hasher.verify("correcthorse", None)


def test_parse_digest(hasher):
    """Test that digests describe their own algorithm and cost."""
    info = parse_digest(hasher.hash("correcthorse"))

    assert info.algorithm == "2b"
    assert info.cost == 4
    assert len(info.salt) == 22
    assert len(info.checksum) == 31


def test_digests_from_lower_cost_still_verify(hasher):
    """Test that raising the cost keeps old digests usable."""
    old_digest = hasher.hash("correcthorse")
    stronger = BcryptPasswordHasher(rounds=5)

    assert stronger.verify("correcthorse", old_digest)
    assert stronger.needs_rehash(old_digest)
    assert not stronger.needs_rehash(stronger.hash("correcthorse"))
    assert not hasher.needs_rehash(old_digest)


def test_rounds_bounds():
    """Test that invalid cost factors are refused."""
    with pytest.raises(ValueError):
        BcryptPasswordHasher(rounds=3)
    with pytest.raises(ValueError):
        BcryptPasswordHasher(rounds=32)
