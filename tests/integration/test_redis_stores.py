"""
Integration tests for the Redis stores.

Requires Redis running on localhost:6379
Skip tests if Redis is not available.
"""

import pytest
from datetime import datetime, timedelta, timezone

import redis

from credkit import CredentialService, SessionInvalid, SessionInvalidReason
from credkit.adapters import BcryptPasswordHasher, FrozenClock, RedisSessionStore, RedisUserStore
from credkit.domain import Credential, SessionToken
from credkit.errors import DuplicateUsernameError, StorageUnavailable

PREFIX = "test:credkit:"


@pytest.fixture
def redis_client():
    """Connect to a local Redis (skip if unavailable)."""
    client = redis.Redis(host="localhost", port=6379, decode_responses=True)
    try:
        client.ping()
    except redis.exceptions.ConnectionError:
        pytest.skip("Redis not available")

    yield client

    # Cleanup: delete all test keys
    for key in client.scan_iter(f"{PREFIX}*"):
        client.delete(key)


@pytest.fixture
def user_store(redis_client):
    return RedisUserStore(redis_client=redis_client, prefix=f"{PREFIX}credential:")


@pytest.fixture
def session_store(redis_client):
    return RedisSessionStore(redis_client=redis_client, prefix=f"{PREFIX}session:", expiry_grace=60)


NOW = datetime.now(timezone.utc)


class TestRedisUserStore:
    """Test Redis credential storage."""

    def test_insert_and_find(self, user_store):
        credential = Credential.create("alice", "$2b$04$digest", now=NOW)

        user_store.insert(credential)

        assert user_store.find_by_username("alice") == credential
        assert user_store.find_by_username("bob") is None

    def test_insert_duplicate(self, user_store):
        user_store.insert(Credential.create("alice", "$2b$04$digest", now=NOW))

        with pytest.raises(DuplicateUsernameError):
            user_store.insert(Credential.create("alice", "$2b$04$other", now=NOW))

    def test_update(self, user_store):
        credential = Credential.create("alice", "$2b$04$digest", now=NOW)
        user_store.insert(credential)

        assert user_store.update(credential.with_digest("$2b$05$new", NOW), expected_digest="$2b$04$digest")

        assert user_store.find_by_username("alice").password_digest == "$2b$05$new"

    def test_update_stale_digest(self, user_store):
        """Test that an update based on an old digest does not overwrite a newer one."""
        credential = Credential.create("alice", "$2b$04$digest", now=NOW)
        user_store.insert(credential)
        user_store.update(credential.with_digest("$2b$05$changed", NOW), expected_digest="$2b$04$digest")

        replaced = user_store.update(credential.with_digest("$2b$05$stale", NOW), expected_digest="$2b$04$digest")

        assert replaced is False
        assert user_store.find_by_username("alice").password_digest == "$2b$05$changed"

    def test_update_missing(self, user_store):
        credential = Credential.create("ghost", "$2b$04$digest", now=NOW)

        assert user_store.update(credential, expected_digest="$2b$04$digest") is False
        assert user_store.find_by_username("ghost") is None


class TestRedisSessionStore:
    """Test Redis session storage."""

    def test_put_and_get(self, session_store, redis_client):
        token = SessionToken.issue("alice", ttl=3600, now=NOW)

        session_store.put(token)

        assert session_store.get(token.token_id) == token
        ttl = redis_client.ttl(f"{PREFIX}session:token:{token.token_id}")
        assert 3600 < ttl <= 3660

    def test_delete(self, session_store):
        token = SessionToken.issue("alice", ttl=3600, now=NOW)
        session_store.put(token)

        assert session_store.delete(token.token_id) is True
        assert session_store.get(token.token_id) is None
        assert session_store.delete(token.token_id) is False

    def test_delete_by_username(self, session_store, redis_client):
        tokens = [SessionToken.issue("alice", ttl=3600, now=NOW) for _ in range(3)]
        other = SessionToken.issue("bob", ttl=3600, now=NOW)
        for token in tokens + [other]:
            session_store.put(token)

        assert session_store.delete_by_username("alice") == 3
        assert session_store.delete_by_username("alice") == 0
        assert session_store.get(other.token_id) == other
        assert redis_client.smembers(f"{PREFIX}session:user:alice") == set()

    def test_delete_unreadable_record(self, session_store, redis_client):
        """Test that a corrupt record can still be deleted."""
        redis_client.set(f"{PREFIX}session:token:broken", "not json")

        assert session_store.get("broken") is None
        assert session_store.delete("broken") is True
        assert redis_client.exists(f"{PREFIX}session:token:broken") == 0
        assert session_store.delete("broken") is False

    def test_cleanup_expired(self, session_store):
        expired = SessionToken.issue("alice", ttl=10, now=NOW)
        live = SessionToken.issue("alice", ttl=3600, now=NOW)
        session_store.put(expired)
        session_store.put(live)

        assert session_store.cleanup_expired(NOW + timedelta(seconds=10)) == 1
        assert session_store.get(expired.token_id) is None
        assert session_store.get(live.token_id) == live

    def test_service_reports_expiry(self, user_store, session_store):
        """Test that the grace window lets the service see EXPIRED."""
        clock = FrozenClock(NOW)
        service = CredentialService(
            BcryptPasswordHasher(rounds=4), user_store, session_store, clock=clock, session_ttl=30,
        )
        service.register("alice", "correcthorse")
        token = service.authenticate("alice", "correcthorse")

        clock.advance(seconds=30)

        assert service.validate_session(token.token_id) == SessionInvalid(SessionInvalidReason.EXPIRED)
        assert service.validate_session(token.token_id) == SessionInvalid(SessionInvalidReason.NOT_FOUND)


def test_unreachable_redis():
    """Test that connection failures surface as StorageUnavailable."""
    client = redis.Redis(host="localhost", port=1, socket_connect_timeout=0.2)
    store = RedisSessionStore(redis_client=client)

    with pytest.raises(StorageUnavailable):
        store.get("anything")
