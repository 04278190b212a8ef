"""
Redis Session Store - Redis-backed session token storage.
"""

from typing import Optional
from datetime import datetime
import json

from loguru import logger

from credkit.ports.session_store_port import SessionStorePort
from credkit.domain.session import SessionToken
from credkit.adapters.redis_common import connect, redis_errors, DEFAULT_REDIS_URL


class RedisSessionStore(SessionStorePort):
    """
    Redis-backed session storage.

    Tokens are stored as JSON with a Redis TTL of the token lifetime plus
    ``expiry_grace`` seconds. The grace window keeps an expired token
    readable for a while so it can be reported as expired rather than
    missing. A set per user indexes that user's token IDs.
    """

    def __init__(
        self,
        redis_client=None,
        prefix: str = "credkit:session:",
        expiry_grace: int = 300,
        redis_url: str = DEFAULT_REDIS_URL,
    ):
        """
        Initialize Redis session store.

        Args:
            redis_client: Redis client instance (created lazily if omitted)
            prefix: Key prefix for sessions
            expiry_grace: Seconds a token outlives its expiry in Redis
            redis_url: URL used when no client is given
        """
        self._redis = redis_client
        self._prefix = prefix
        self._expiry_grace = expiry_grace
        self._redis_url = redis_url

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            self._redis = connect(self._redis_url)
        return self._redis

    def _key(self, token_id: str) -> str:
        """Generate Redis key for a token."""
        return f"{self._prefix}token:{token_id}"

    def _user_key(self, username: str) -> str:
        """Generate Redis set key for a user's tokens."""
        return f"{self._prefix}user:{username}"

    def put(self, token: SessionToken) -> None:
        """Store a token with TTL and index it under its user."""
        redis_ttl = max(token.ttl_seconds, 1) + self._expiry_grace
        user_key = self._user_key(token.username)

        with redis_errors("put"):
            pipe = self._get_redis().pipeline()
            pipe.setex(self._key(token.token_id), redis_ttl, json.dumps(token.to_dict()))
            pipe.sadd(user_key, token.token_id)
            pipe.expire(user_key, redis_ttl)
            pipe.execute()

    def get(self, token_id: str) -> Optional[SessionToken]:
        """Get a token from Redis."""
        with redis_errors("get"):
            data = self._get_redis().get(self._key(token_id))

        if not data:
            return None

        try:
            return SessionToken.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError):
            logger.warning("Discarding unreadable session record")
            return None

    def delete(self, token_id: str) -> bool:
        """
        Delete a token and drop it from its user's index.

        Unreadable records are deleted too; the index entry is left for
        Redis to expire when the owner cannot be read.
        """
        key = self._key(token_id)

        with redis_errors("delete"):
            redis = self._get_redis()
            data = redis.get(key)
            if not data:
                return False

            pipe = redis.pipeline()
            pipe.delete(key)
            owner = self._owner_of(data)
            if owner is not None:
                pipe.srem(self._user_key(owner), token_id)
            deleted = pipe.execute()[0]

        return bool(deleted)

    def delete_by_username(self, username: str) -> int:
        """
        Delete every token indexed under a user.

        Only the members read here are removed from the index, so a token
        issued concurrently stays indexed.
        """
        user_key = self._user_key(username)

        with redis_errors("delete_by_username"):
            redis = self._get_redis()
            token_ids = list(redis.smembers(user_key))
            if not token_ids:
                return 0

            pipe = redis.pipeline()
            pipe.delete(*[self._key(tid) for tid in token_ids])
            pipe.srem(user_key, *token_ids)
            deleted = pipe.execute()[0]

        return int(deleted)

    @staticmethod
    def _owner_of(data) -> Optional[str]:
        try:
            return json.loads(data)["username"]
        except (json.JSONDecodeError, KeyError, TypeError):
            return None

    def cleanup_expired(self, now: datetime) -> int:
        """
        Delete tokens whose expiry has passed but which are still
        inside the grace window. Redis drops the rest on its own.
        """
        count = 0

        with redis_errors("cleanup_expired"):
            for key in self._get_redis().scan_iter(f"{self._prefix}token:*"):
                token_id = key[len(self._prefix) + len("token:"):]
                token = self.get(token_id)
                if token and token.is_expired(now) and self.delete(token_id):
                    count += 1

        return count
