"""
Payroll Engines -- pure calculation functions.

Every function here is deterministic: no I/O, no database, no clock
reads.  Inputs are frozen value objects; outputs are frozen value
objects.  Each top-level engine entry point is wrapped in
``@traced_engine`` and emits ``PAYROLL_ENGINE_TRACE``.

Engines:
- attendance: day classification and monthly attendance totals
- leave: durations, month clipping, monthly summary, yearly balance
- reward: monthly reward summary
- salary: salary breakdown from the three aggregates
"""

from payroll_engines.attendance import aggregate_attendance, classify_day, session_worked_minutes
from payroll_engines.leave import (
    clip_to_month,
    compute_leave_balance,
    leave_duration,
    summarize_month_leaves,
)
from payroll_engines.reward import summarize_rewards
from payroll_engines.salary import compute_salary
from payroll_engines.tracer import traced_engine

__all__ = [
    "aggregate_attendance",
    "classify_day",
    "session_worked_minutes",
    "leave_duration",
    "clip_to_month",
    "summarize_month_leaves",
    "compute_leave_balance",
    "summarize_rewards",
    "compute_salary",
    "traced_engine",
]
