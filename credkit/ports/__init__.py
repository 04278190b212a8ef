"""
Ports - Interfaces for hashing, credential storage, session storage and time.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from credkit.ports.hasher_port import PasswordHasherPort
from credkit.ports.user_store_port import UserStorePort
from credkit.ports.session_store_port import SessionStorePort
from credkit.ports.clock_port import ClockPort

__all__ = [
    "PasswordHasherPort",
    "UserStorePort",
    "SessionStorePort",
    "ClockPort",
]
