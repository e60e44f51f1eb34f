"""
Module: payroll_kernel.db.types
Responsibility: The UTC timestamp column type and the canonical rounding
    helpers.  Every model and engine uses the same precision and the same
    rounding mode so persisted reports reproduce identically.
Architecture position: Kernel > DB.  May be imported by domain/, engines,
    modules and services.  MUST NOT import from any of those layers.

Invariants enforced:
    - No floats anywhere.  Amounts, rates, hours and day counts are Decimal.
    - Timestamps are stored and returned as UTC-aware datetimes (UTCDateTime).
    - round_money() is the ONLY sanctioned rounding function for monetary
      values and reported hours: two decimal places, ROUND_HALF_UP.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

_QUANTUM = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)


def round_money(value: Decimal | int) -> Decimal:
    """
    Round to two decimal places using standard half-up rounding.

    Postconditions: Returns a Decimal with exactly two decimal places.

    Examples:
        round_money(Decimal("90.909090")) -> Decimal("90.91")
        round_money(Decimal("0.005")) -> Decimal("0.01")
    """
    return Decimal(value).quantize(_QUANTUM, rounding=DEFAULT_ROUNDING)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Convert an int or numeric string to Decimal.

    Raises:
        TypeError: if given a float.  Floats are forbidden in payroll math.
        decimal.InvalidOperation: if a string is not a number.
    """
    if isinstance(value, float):
        raise TypeError(f"float is not allowed in payroll arithmetic: {value!r}")
    return Decimal(value)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always reads back in UTC.

    SQLite has no timestamp-with-zone storage and returns naive values;
    PostgreSQL returns the session time zone.  Both are normalized to UTC
    here so a stamp written by a service compares equal to the same stamp
    read back later.  Naive values are taken to be UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        return _as_utc(value)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        return _as_utc(value)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
