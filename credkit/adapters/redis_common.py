"""
Shared Redis plumbing for the Redis-backed stores.
"""

from contextlib import contextmanager
from typing import Iterator

import redis
from redis.exceptions import RedisError

from credkit.errors import StorageUnavailable

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


def connect(url: str = DEFAULT_REDIS_URL) -> "redis.Redis":
    """Build a client that returns ``str`` rather than ``bytes``."""
    return redis.Redis.from_url(url, decode_responses=True)


@contextmanager
def redis_errors(operation: str) -> Iterator[None]:
    """Re-raise Redis client failures as StorageUnavailable."""
    try:
        yield
    except RedisError as exc:
        raise StorageUnavailable("redis", operation) from exc
