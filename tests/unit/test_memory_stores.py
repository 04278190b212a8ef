"""
Unit tests for the in-memory stores.
"""

import threading

import pytest
from datetime import timedelta

from credkit.adapters import MemorySessionStore, MemoryUserStore
from credkit.domain import Credential, SessionToken
from credkit.errors import DuplicateUsernameError


def _credential(username, clock):
    return Credential.create(username=username, password_digest="$2b$04$digest", now=clock.now())


class TestMemoryUserStore:
    """Test in-memory credential storage."""

    def test_insert_and_find(self, clock):
        store = MemoryUserStore()
        credential = _credential("alice", clock)

        store.insert(credential)

        assert store.find_by_username("alice") == credential
        assert store.find_by_username("bob") is None

    def test_insert_duplicate(self, clock):
        store = MemoryUserStore()
        store.insert(_credential("alice", clock))

        with pytest.raises(DuplicateUsernameError):
            store.insert(_credential("alice", clock))

    def test_update_compare_and_set(self, clock):
        """Test that an update only lands on the digest it was based on."""
        store = MemoryUserStore()
        credential = _credential("alice", clock)
        store.insert(credential)
        upgraded = credential.with_digest("$2b$05$upgraded", clock.now())

        assert store.update(upgraded, expected_digest="$2b$04$digest") is True
        assert store.find_by_username("alice") == upgraded

        stale = credential.with_digest("$2b$05$stale", clock.now())
        assert store.update(stale, expected_digest="$2b$04$digest") is False
        assert store.find_by_username("alice") == upgraded

    def test_update_missing(self, clock):
        store = MemoryUserStore()

        assert store.update(_credential("alice", clock), expected_digest="$2b$04$digest") is False
        assert store.find_by_username("alice") is None

    def test_concurrent_inserts_single_winner(self, clock):
        """Test that only one of many racing registrations succeeds."""
        store = MemoryUserStore()
        outcomes = []
        barrier = threading.Barrier(8)

        def register():
            barrier.wait()
            try:
                store.insert(_credential("alice", clock))
                outcomes.append("ok")
            except DuplicateUsernameError:
                outcomes.append("dup")

        threads = [threading.Thread(target=register) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("dup") == 7
        assert len(store) == 1


class TestMemorySessionStore:
    """Test in-memory session storage."""

    def test_put_get_delete(self, clock):
        store = MemorySessionStore()
        token = SessionToken.issue("alice", ttl=60, now=clock.now())

        store.put(token)
        assert store.get(token.token_id) == token

        assert store.delete(token.token_id) is True
        assert store.get(token.token_id) is None
        assert store.delete(token.token_id) is False

    def test_get_returns_expired_tokens(self, clock):
        """Test that the store leaves expiry decisions to the service."""
        store = MemorySessionStore()
        token = SessionToken.issue("alice", ttl=60, now=clock.now())
        store.put(token)

        assert store.get(token.token_id) == token

    def test_delete_by_username(self, clock):
        store = MemorySessionStore()
        alice = [SessionToken.issue("alice", ttl=60, now=clock.now()) for _ in range(3)]
        bob = SessionToken.issue("bob", ttl=60, now=clock.now())
        for token in alice + [bob]:
            store.put(token)

        assert store.delete_by_username("alice") == 3
        assert store.delete_by_username("alice") == 0
        assert len(store) == 1
        assert store.get(bob.token_id) == bob

    def test_cleanup_expired(self, clock):
        store = MemorySessionStore()
        short = SessionToken.issue("alice", ttl=10, now=clock.now())
        long = SessionToken.issue("alice", ttl=1000, now=clock.now())
        store.put(short)
        store.put(long)

        assert store.cleanup_expired(clock.now() + timedelta(seconds=10)) == 1
        assert store.get(short.token_id) is None
        assert store.get(long.token_id) == long
        # Index stays consistent
        assert store.delete_by_username("alice") == 1
