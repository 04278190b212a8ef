"""
Redis Example - Service built from CREDKIT_* settings with Redis storage.

Requires Redis on CREDKIT_REDIS_URL (default redis://localhost:6379/0).
"""

from credkit import CredentialService, DuplicateUsernameError
from credkit.adapters import RedisSessionStore, RedisUserStore
from credkit.config import get_settings
from credkit.log import setup_logging


def main():
    settings = get_settings()
    setup_logging(settings.log_level)

    users = RedisUserStore(
        prefix=f"{settings.redis.prefix}credential:",
        redis_url=settings.redis.url,
    )
    sessions = RedisSessionStore(
        prefix=f"{settings.redis.prefix}session:",
        expiry_grace=settings.session.expiry_grace_seconds,
        redis_url=settings.redis.url,
    )
    service = CredentialService.from_settings(settings, users=users, sessions=sessions)

    try:
        service.register("alice", "correcthorse")
    except DuplicateUsernameError:
        print("alice already registered")

    token = service.authenticate("alice", "correcthorse")
    if token:
        print(f"Session for {service.validate_session(token.token_id)}")
        print(f"Revoked {service.logout_all('alice')} session(s)")


if __name__ == "__main__":
    main()
