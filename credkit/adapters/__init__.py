"""
Adapters - Implementations of ports.

Hashing:
- BcryptPasswordHasher: bcrypt with tunable cost

Credential Storage:
- MemoryUserStore: In-memory credentials (testing)
- RedisUserStore: Redis-backed credentials
- DynamoDBUserStore: AWS DynamoDB credentials

Session Storage:
- MemorySessionStore: In-memory sessions (testing)
- RedisSessionStore: Redis-backed sessions
- DynamoDBSessionStore: AWS DynamoDB sessions

Time:
- SystemClock: UTC wall clock
- FrozenClock: Manually advanced clock (testing)
"""

# Hashing
from credkit.adapters.bcrypt_hasher import BcryptPasswordHasher, DigestInfo, parse_digest

# Credential Storage
from credkit.adapters.memory_user_store import MemoryUserStore
from credkit.adapters.redis_user_store import RedisUserStore
from credkit.adapters.dynamodb_user_store import DynamoDBUserStore

# Session Storage
from credkit.adapters.memory_session_store import MemorySessionStore
from credkit.adapters.redis_session_store import RedisSessionStore
from credkit.adapters.dynamodb_session_store import DynamoDBSessionStore

# Time
from credkit.adapters.clock import SystemClock, FrozenClock

__all__ = [
    # Hashing
    "BcryptPasswordHasher",
    "DigestInfo",
    "parse_digest",
    # Credential Storage
    "MemoryUserStore",
    "RedisUserStore",
    "DynamoDBUserStore",
    # Session Storage
    "MemorySessionStore",
    "RedisSessionStore",
    "DynamoDBSessionStore",
    # Time
    "SystemClock",
    "FrozenClock",
]
