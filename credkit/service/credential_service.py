"""
Credential Service - Registration, login and session validation.

Login state machine (terminal states in brackets):

    START -> LOOKUP_USER -> [USER_NOT_FOUND]
                         -> VERIFY_PASSWORD -> [REJECTED]
                                            -> ISSUE_SESSION -> [AUTHENTICATED]

The service keeps no per-request state. One instance can be shared by
every thread serving requests; all mutable state lives in the stores.
"""

import secrets
from typing import Optional, Union

from loguru import logger

from credkit.adapters.bcrypt_hasher import BcryptPasswordHasher
from credkit.adapters.clock import SystemClock
from credkit.domain.credential import Credential
from credkit.domain.results import (
    AuthFailure,
    AuthFailureReason,
    SessionInvalid,
    SessionInvalidReason,
)
from credkit.domain.session import DEFAULT_TOKEN_BYTES, SessionToken
from credkit.errors import DuplicateUsernameError, InvalidInputError, MalformedDigestError
from credkit.log import token_hint
from credkit.ports.clock_port import ClockPort
from credkit.ports.hasher_port import PasswordHasherPort
from credkit.ports.session_store_port import SessionStorePort
from credkit.ports.user_store_port import UserStorePort

AuthResult = Union[SessionToken, AuthFailure]
SessionResult = Union[str, SessionInvalid]

DEFAULT_SESSION_TTL = 3600


def _require_text(value: str, field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} must not be empty", context={"field": field})


class CredentialService:
    """
    Authenticate username/password pairs and manage session tokens.

    Example:
        from credkit import CredentialService
        from credkit.adapters import (
            BcryptPasswordHasher, MemoryUserStore, MemorySessionStore,
        )

        service = CredentialService(
            hasher=BcryptPasswordHasher(rounds=12),
            users=MemoryUserStore(),
            sessions=MemorySessionStore(),
        )

        service.register("alice", "correcthorse")
        result = service.authenticate("alice", "correcthorse")
        if result:
            username = service.validate_session(result.token_id)
    """

    def __init__(
        self,
        hasher: PasswordHasherPort,
        users: UserStorePort,
        sessions: SessionStorePort,
        clock: Optional[ClockPort] = None,
        session_ttl: int = DEFAULT_SESSION_TTL,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ):
        """
        Initialize the service with its collaborators.

        Args:
            hasher: Password hasher
            users: Credential store
            sessions: Session token store
            clock: Time source (system UTC clock if omitted)
            session_ttl: Session lifetime in seconds
            token_bytes: Random bytes per session token ID
        """
        if session_ttl <= 0:
            raise ValueError("session_ttl must be positive")

        self._hasher = hasher
        self._users = users
        self._sessions = sessions
        self._clock = clock or SystemClock()
        self._session_ttl = session_ttl
        self._token_bytes = token_bytes

        # Verified against when the user does not exist, so both rejection
        # paths pay for one full hash comparison.
        self._dummy_digest = hasher.hash(secrets.token_urlsafe(16))

    @classmethod
    def from_settings(
        cls,
        settings,
        users: UserStorePort,
        sessions: SessionStorePort,
        clock: Optional[ClockPort] = None,
    ) -> "CredentialService":
        """
        Build a service from CredkitSettings.

        Args:
            settings: CredkitSettings instance
            users: Credential store
            sessions: Session token store
            clock: Optional time source

        Returns:
            Configured service using a bcrypt hasher
        """
        return cls(
            hasher=BcryptPasswordHasher(rounds=settings.hashing.rounds),
            users=users,
            sessions=sessions,
            clock=clock,
            session_ttl=settings.session.ttl_seconds,
            token_bytes=settings.session.token_bytes,
        )

    def register(self, username: str, plaintext: str) -> Credential:
        """
        Register a new user.

        Args:
            username: Unique login name
            plaintext: Password

        Returns:
            The stored credential (digest only)

        Raises:
            InvalidInputError: If username or password is empty
            DuplicateUsernameError: If the username is taken
            StorageUnavailable: If the user store fails
        """
        _require_text(username, "username")
        if not plaintext:
            raise InvalidInputError("password must not be empty", context={"field": "password"})

        if self._users.find_by_username(username) is not None:
            raise DuplicateUsernameError(username)

        credential = Credential.create(
            username=username,
            password_digest=self._hasher.hash(plaintext),
            now=self._clock.now(),
        )

        # The store re-checks uniqueness atomically; a concurrent
        # registration surfaces here as DuplicateUsernameError.
        self._users.insert(credential)

        logger.info("Registered user {}", username)
        return credential

    def authenticate(self, username: str, plaintext: str) -> AuthResult:
        """
        Check a username/password pair and open a session.

        Args:
            username: Login name
            plaintext: Password

        Returns:
            SessionToken on success, AuthFailure otherwise

        Raises:
            InvalidInputError: If username or password is empty
            MalformedDigestError: If the stored digest is corrupt
            StorageUnavailable: If a store fails
        """
        credential = self._check_password(username, plaintext)
        if isinstance(credential, AuthFailure):
            return credential

        if self._hasher.needs_rehash(credential.password_digest):
            upgraded = credential.with_digest(self._hasher.hash(plaintext), self._clock.now())
            if self._users.update(upgraded, expected_digest=credential.password_digest):
                logger.info("Upgraded password digest cost for {}", username)
            else:
                # The credential changed after it was verified; check again
                # against what is stored now.
                logger.info("Skipped digest upgrade for {}: credential changed", username)
                credential = self._check_password(username, plaintext)
                if isinstance(credential, AuthFailure):
                    return credential

        token = SessionToken.issue(
            username=username,
            ttl=self._session_ttl,
            now=self._clock.now(),
            token_bytes=self._token_bytes,
        )
        self._sessions.put(token)

        logger.info("User {} authenticated (session {})", username, token_hint(token.token_id))
        return token

    def validate_session(self, token_id: str) -> SessionResult:
        """
        Resolve a session token to its username.

        Expired tokens are deleted as a side effect.

        Args:
            token_id: Token ID presented by the caller

        Returns:
            Username if valid, SessionInvalid otherwise
        """
        if not token_id:
            return SessionInvalid(SessionInvalidReason.NOT_FOUND)

        token = self._sessions.get(token_id)
        if token is None:
            return SessionInvalid(SessionInvalidReason.NOT_FOUND)

        if token.is_expired(self._clock.now()):
            self._sessions.delete(token_id)
            logger.debug("Session {} expired", token_hint(token_id))
            return SessionInvalid(SessionInvalidReason.EXPIRED)

        return token.username

    def logout(self, token_id: str) -> None:
        """
        End a session. Unknown or already-deleted tokens are ignored.

        Args:
            token_id: Token ID to revoke
        """
        if token_id and self._sessions.delete(token_id):
            logger.info("Session {} logged out", token_hint(token_id))

    def logout_all(self, username: str) -> int:
        """
        End every session of a user.

        Args:
            username: Owner of the sessions

        Returns:
            Number of sessions removed
        """
        _require_text(username, "username")
        count = self._sessions.delete_by_username(username)
        if count:
            logger.info("Revoked {} session(s) for {}", count, username)
        return count

    def change_password(
        self,
        username: str,
        old_plaintext: str,
        new_plaintext: str,
    ) -> Union[Credential, AuthFailure]:
        """
        Replace a user's password after checking the current one.

        All of the user's sessions are revoked on success.

        Args:
            username: Login name
            old_plaintext: Current password
            new_plaintext: Replacement password

        Returns:
            Updated credential, or AuthFailure if the current password is wrong
            or the credential was changed or deleted concurrently

        Raises:
            InvalidInputError: If any argument is empty
            MalformedDigestError: If the stored digest is corrupt
            StorageUnavailable: If a store fails
        """
        if not new_plaintext:
            raise InvalidInputError("new password must not be empty", context={"field": "new_password"})

        credential = self._check_password(username, old_plaintext)
        if isinstance(credential, AuthFailure):
            return credential

        updated = credential.with_digest(self._hasher.hash(new_plaintext), self._clock.now())
        if not self._users.update(updated, expected_digest=credential.password_digest):
            # Deleted or changed by someone else since the old password was checked
            logger.warning("Password change for {} lost a concurrent update", username)
            if self._users.find_by_username(username) is None:
                return AuthFailure(AuthFailureReason.USER_NOT_FOUND)
            return AuthFailure(AuthFailureReason.BAD_PASSWORD)

        revoked = self._sessions.delete_by_username(username)

        logger.info("Password changed for {} ({} session(s) revoked)", username, revoked)
        return updated

    def _check_password(self, username: str, plaintext: str) -> Union[Credential, AuthFailure]:
        _require_text(username, "username")
        if not plaintext:
            raise InvalidInputError("password must not be empty", context={"field": "password"})

        credential = self._users.find_by_username(username)

        if credential is None:
            self._hasher.verify(plaintext, self._dummy_digest)
            self._log_rejection(username)
            return AuthFailure(AuthFailureReason.USER_NOT_FOUND)

        try:
            matched = self._hasher.verify(plaintext, credential.password_digest)
        except MalformedDigestError:
            logger.error("Stored password digest for {} is malformed", username)
            raise

        if not matched:
            if self._hasher.needs_rehash(credential.password_digest):
                # A cheaper legacy digest would answer faster than the
                # unknown-user path; pay the configured cost as well.
                self._hasher.verify(plaintext, self._dummy_digest)
            self._log_rejection(username)
            return AuthFailure(AuthFailureReason.BAD_PASSWORD)

        return credential

    @staticmethod
    def _log_rejection(username: str) -> None:
        # Same wording for both reasons
        logger.warning("Rejected login for {}", username)
