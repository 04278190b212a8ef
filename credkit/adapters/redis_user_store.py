"""
Redis User Store - Redis-backed credential storage.
"""

from typing import Optional
import json

from loguru import logger

from credkit.ports.user_store_port import UserStorePort
from credkit.domain.credential import Credential
from credkit.errors import DuplicateUsernameError
from credkit.adapters.redis_common import connect, redis_errors, DEFAULT_REDIS_URL

# Swap the record only while its stored digest matches ARGV[1]
_COMPARE_AND_SET = """
local current = redis.call("GET", KEYS[1])
if not current then
    return 0
end
if cjson.decode(current)["password_digest"] ~= ARGV[1] then
    return 0
end
redis.call("SET", KEYS[1], ARGV[2])
return 1
"""


class RedisUserStore(UserStorePort):
    """
    Redis-backed credential storage.

    Each credential is a JSON string under ``<prefix><username>``.
    Inserts use ``SET NX`` so concurrent registrations of the same
    name cannot both succeed.
    """

    def __init__(
        self,
        redis_client=None,
        prefix: str = "credkit:credential:",
        redis_url: str = DEFAULT_REDIS_URL,
    ):
        """
        Initialize Redis user store.

        Args:
            redis_client: Redis client instance (created lazily if omitted)
            prefix: Key prefix for credentials
            redis_url: URL used when no client is given
        """
        self._redis = redis_client
        self._prefix = prefix
        self._redis_url = redis_url

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            self._redis = connect(self._redis_url)
        return self._redis

    def _key(self, username: str) -> str:
        """Generate Redis key for a credential."""
        return f"{self._prefix}{username}"

    def find_by_username(self, username: str) -> Optional[Credential]:
        """Look up a credential in Redis."""
        with redis_errors("find_by_username"):
            data = self._get_redis().get(self._key(username))

        if not data:
            return None

        return Credential.from_dict(json.loads(data))

    def insert(self, credential: Credential) -> None:
        """Insert a credential unless the username is taken."""
        payload = json.dumps(credential.to_dict())

        with redis_errors("insert"):
            created = self._get_redis().set(self._key(credential.username), payload, nx=True)

        if not created:
            logger.debug("Redis rejected duplicate credential key")
            raise DuplicateUsernameError(credential.username)

    def update(self, credential: Credential, expected_digest: str) -> bool:
        """Overwrite a credential if its digest is still ``expected_digest``."""
        payload = json.dumps(credential.to_dict())

        with redis_errors("update"):
            replaced = self._get_redis().eval(
                _COMPARE_AND_SET,
                1,
                self._key(credential.username),
                expected_digest,
                payload,
            )

        return bool(replaced)
