"""
Shared fixtures.

Hashers use the minimum bcrypt cost so the suite stays fast.
"""

import pytest
from datetime import datetime, timezone

from credkit import CredentialService
from credkit.adapters import (
    BcryptPasswordHasher,
    FrozenClock,
    MemorySessionStore,
    MemoryUserStore,
)

TEST_ROUNDS = 4


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def users():
    return MemoryUserStore()


@pytest.fixture
def sessions():
    return MemorySessionStore()


@pytest.fixture
def service(hasher, users, sessions, clock):
    return CredentialService(
        hasher=hasher,
        users=users,
        sessions=sessions,
        clock=clock,
        session_ttl=3600,
    )
