"""
Pure domain layer.

Contains the clock abstraction, the work-calendar policy and the domain
events exchanged between modules, with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- I/O

All domain objects are immutable and deterministic.
"""

from payroll_kernel.domain.calendar import (
    DEFAULT_POLICY,
    WorkCalendarPolicy,
    iter_month_dates,
    month_bounds,
    validate_period,
)
from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.events import (
    LeaveApproved,
    PayrollDomainEvent,
    RewardGranted,
    RewardRevoked,
)

__all__ = [
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "WorkCalendarPolicy",
    "DEFAULT_POLICY",
    "month_bounds",
    "validate_period",
    "iter_month_dates",
    "LeaveApproved",
    "RewardGranted",
    "RewardRevoked",
    "PayrollDomainEvent",
]
