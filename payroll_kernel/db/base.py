"""
Declarative base for the payroll tables.

Every payroll row (employee, attendance session, leave request, reward,
salary report) is keyed by a UUID so ids can be handed out by services
before a flush and compared across databases.  UUIDs are stored as
``String(36)``; the same schema runs on PostgreSQL in production and on
SQLite in tests.

Column conventions come from ``type_annotation_map``:

    Decimal   -> Numeric(38, 9)   salaries, rates, day counts
    datetime  -> UTCDateTime      approval, payment and check-in stamps
    UUID      -> UUIDString       primary and foreign keys

This module is the bottom of the ORM stack: it imports nothing from the
domain, modules or services.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import BigInteger, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from payroll_kernel.db.types import UTCDateTime


class UUIDString(TypeDecorator):
    """UUID bound as its canonical string and read back as ``uuid.UUID``."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else PyUUID(value)


class Base(DeclarativeBase):
    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        datetime: UTCDateTime(),
        PyUUID: UUIDString(),
        int: BigInteger,
    }

    id: Mapped[PyUUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Base for payroll tables that record when a row was written.

    ``created_at`` is stamped by the database on INSERT; ``updated_at`` also
    moves on every UPDATE, so a regenerated salary report shows when it was
    last recalculated.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False,
    )


UUID = PyUUID
