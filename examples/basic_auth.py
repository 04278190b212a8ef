"""
Basic Authentication Example - bcrypt passwords with in-memory sessions.
"""

from credkit import CredentialService
from credkit.adapters import BcryptPasswordHasher, MemorySessionStore, MemoryUserStore
from credkit.log import setup_logging


def main():
    setup_logging("INFO")

    # Initialize the service
    service = CredentialService(
        hasher=BcryptPasswordHasher(rounds=12),
        users=MemoryUserStore(),
        sessions=MemorySessionStore(),
        session_ttl=3600,
    )

    # Register a user
    credential = service.register("alice", "correcthorse")
    print(f"Registered user: {credential.username}")
    print(f"Stored digest: {credential.password_digest[:7]}...")

    # Login (creates session token)
    token = service.authenticate("alice", "correcthorse")
    if not token:
        print("\nLogin failed!")
        return

    print(f"\nLogin successful!")
    print(f"Expires at: {token.expires_at.isoformat()}")

    # Resolve the token on a later request
    username = service.validate_session(token.token_id)
    print(f"\nSession belongs to: {username}")

    # Wrong password
    rejected = service.authenticate("alice", "wrongpass")
    print(f"\nWrong password accepted: {bool(rejected)}")

    # Logout
    service.logout(token.token_id)
    print(f"\nLogged out successfully")

    # Validate after logout (should fail)
    after_logout = service.validate_session(token.token_id)
    print(f"Session valid after logout: {bool(after_logout)}")


if __name__ == "__main__":
    main()
