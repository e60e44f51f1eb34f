"""Database layer - engine, base classes, types."""

from payroll_kernel.db.base import UUID, Base, TrackedBase, UUIDString
from payroll_kernel.db.engine import create_tables, get_engine, get_session, session_scope
from payroll_kernel.db.types import UTCDateTime, round_money, to_decimal

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
    "UTCDateTime",
    "UUID",
    "round_money",
    "to_decimal",
]
