"""
Clock Port - Injected time source.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Port: Current time, timezone-aware UTC."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current UTC time."""
        pass
