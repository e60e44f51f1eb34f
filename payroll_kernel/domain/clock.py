"""
Injectable time source for payroll stamps.

Leave approvals, reward revocations and salary report calculation, approval
and payment times are all taken from a ``Clock`` passed to the service, never
from ``datetime.now()``.  Every stamp is a UTC-aware datetime, matching how
``UTCDateTime`` columns read them back.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

PAYROLL_EPOCH = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):

    @abstractmethod
    def now(self) -> datetime:
        """Current time, UTC-aware."""


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Frozen clock for tests and report replays.

    ``now()`` keeps returning the same instant until ``advance()`` moves it,
    so a test can assert that a stamp was (or was not) rewritten.
    """

    def __init__(self, fixed_time: datetime = PAYROLL_EPOCH):
        if fixed_time.tzinfo is None:
            raise ValueError("DeterministicClock needs a timezone-aware datetime")
        self._now = fixed_time.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: int = 1) -> None:
        self._now += timedelta(seconds=seconds)
