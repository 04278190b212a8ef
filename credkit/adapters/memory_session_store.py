"""
Memory Session Store - In-memory session storage (testing only).
"""

import threading
from typing import Optional, Dict, Set
from datetime import datetime
from credkit.ports.session_store_port import SessionStorePort
from credkit.domain.session import SessionToken


class MemorySessionStore(SessionStorePort):
    """
    In-memory session storage.

    WARNING: Only for testing. Sessions are lost on restart.
    Not suitable for production or distributed deployments.
    """

    def __init__(self):
        """Initialize in-memory storage."""
        self._tokens: Dict[str, SessionToken] = {}
        self._user_tokens: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def put(self, token: SessionToken) -> None:
        """Store a token in memory."""
        with self._lock:
            self._tokens[token.token_id] = token
            self._user_tokens.setdefault(token.username, set()).add(token.token_id)

    def get(self, token_id: str) -> Optional[SessionToken]:
        """Get a token from memory."""
        with self._lock:
            return self._tokens.get(token_id)

    def delete(self, token_id: str) -> bool:
        """Delete a token from memory."""
        with self._lock:
            return self._delete_locked(token_id)

    def delete_by_username(self, username: str) -> int:
        """Delete all tokens of a user."""
        with self._lock:
            token_ids = list(self._user_tokens.get(username, ()))
            return sum(1 for token_id in token_ids if self._delete_locked(token_id))

    def cleanup_expired(self, now: datetime) -> int:
        """Clean up expired tokens."""
        with self._lock:
            expired_ids = [
                tid for tid, token in self._tokens.items()
                if token.is_expired(now)
            ]

            for token_id in expired_ids:
                self._delete_locked(token_id)

            return len(expired_ids)

    def _delete_locked(self, token_id: str) -> bool:
        token = self._tokens.pop(token_id, None)
        if not token:
            return False

        # Remove from user index
        owned = self._user_tokens.get(token.username)
        if owned is not None:
            owned.discard(token_id)
            if not owned:
                del self._user_tokens[token.username]

        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
