"""
Domain events published by the leave and reward services.

Responsibility:
    Make the cross-aggregate write (approved leave / granted reward
    becoming attendance sessions) an explicit message instead of an
    upsert buried inside the leave or reward service.

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.  Consumed by
    ``payroll_modules.attendance.materializer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class LeaveApproved:
    """A leave request entered APPROVED status.

    ``half_day_slot`` is the slot name (``"MORNING"`` / ``"AFTERNOON"``)
    for a half-day leave, ``None`` for full days.
    """

    employee_id: UUID
    start_date: date
    end_date: date
    half_day_slot: str | None = None

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError(
                f"LeaveApproved start_date {self.start_date} after end_date {self.end_date}"
            )


@dataclass(frozen=True)
class RewardGranted:
    employee_id: UUID
    reward_date: date


@dataclass(frozen=True)
class RewardRevoked:
    employee_id: UUID
    reward_date: date


PayrollDomainEvent = LeaveApproved | RewardGranted | RewardRevoked
