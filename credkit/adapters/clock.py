"""
Clock Adapters - System time and a controllable test clock.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from credkit.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    """Production clock backed by ``datetime.now(timezone.utc)``."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock(ClockPort):
    """
    Test clock pinned to a fixed instant.

    Time only moves when advance() is called.
    """

    def __init__(self, fixed: Optional[datetime] = None):
        self._fixed = fixed or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs) -> None:
        """Advance by the given ``timedelta`` keyword arguments."""
        self._fixed += timedelta(**kwargs)
