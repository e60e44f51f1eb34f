"""
Attendance Module (``payroll_modules.attendance``).

Half-day session records, the monthly ``AttendanceCalculation``, and the
materializer that turns approved leave and granted rewards into
synthetic sessions.
"""

from payroll_modules.attendance.models import (
    AttendanceCalculation,
    AttendanceSessionRecord,
    DayAttendanceSummary,
    DayStatus,
    SessionSlot,
    SessionStatus,
)

__all__ = [
    "AttendanceCalculation",
    "AttendanceSessionRecord",
    "DayAttendanceSummary",
    "DayStatus",
    "SessionSlot",
    "SessionStatus",
]
