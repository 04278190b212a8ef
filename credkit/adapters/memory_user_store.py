"""
Memory User Store - In-memory credential storage (testing only).
"""

import threading
from typing import Dict, Optional
from credkit.ports.user_store_port import UserStorePort
from credkit.domain.credential import Credential
from credkit.errors import DuplicateUsernameError


class MemoryUserStore(UserStorePort):
    """
    In-memory credential storage.

    WARNING: Only for testing. Credentials are lost on restart.
    Not suitable for production or distributed deployments.
    """

    def __init__(self):
        """Initialize in-memory storage."""
        self._users: Dict[str, Credential] = {}
        self._lock = threading.Lock()

    def find_by_username(self, username: str) -> Optional[Credential]:
        """Look up a credential in memory."""
        with self._lock:
            return self._users.get(username)

    def insert(self, credential: Credential) -> None:
        """Insert a credential; check and write happen under one lock."""
        with self._lock:
            if credential.username in self._users:
                raise DuplicateUsernameError(credential.username)
            self._users[credential.username] = credential

    def update(self, credential: Credential, expected_digest: str) -> bool:
        """Replace a credential if its digest is still ``expected_digest``."""
        with self._lock:
            current = self._users.get(credential.username)
            if current is None or current.password_digest != expected_digest:
                return False
            self._users[credential.username] = credential
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
