"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Loads the work-calendar YAML file and parses it into a frozen
``WorkCalendarPolicy``.  The single public entry point for runtime
configuration is ``payroll_config.get_calendar_policy()``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends only on the kernel
domain (``WorkCalendarPolicy``).  Engines, modules and services never
read YAML themselves.

Invariants enforced
-------------------
* Decimal fields are parsed from strings or ints; floats are rejected so
  no binary rounding enters payroll arithmetic.
* Missing keys fall back to the ``WorkCalendarPolicy`` defaults.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unparseable value  -> ``ValueError`` with the offending key.
* Inconsistent policy  -> ``InvalidCalendarPolicyError`` from the policy.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from payroll_kernel.domain.calendar import WorkCalendarPolicy

WEEKDAY_NAMES: dict[str, int] = {
    "MONDAY": 0,
    "TUESDAY": 1,
    "WEDNESDAY": 2,
    "THURSDAY": 3,
    "FRIDAY": 4,
    "SATURDAY": 5,
    "SUNDAY": 6,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_decimal(key: str, value: Any) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"{key}: expected a quoted decimal string, got {value!r}")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{key}: cannot parse decimal from {value!r}") from exc


def parse_weekday(value: Any) -> int:
    """Accept a weekday name (``SATURDAY``) or a ``date.weekday()`` number."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().upper() in WEEKDAY_NAMES:
        return WEEKDAY_NAMES[value.strip().upper()]
    raise ValueError(f"weekend_days: unknown weekday {value!r}")


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_month_day(value: Any) -> tuple[int, int]:
    """Parse an ``MM-DD`` recurring holiday into (month, day)."""
    if not isinstance(value, str) or value.count("-") != 1:
        raise ValueError(f"recurring_holidays: expected MM-DD, got {value!r}")
    month_s, day_s = value.split("-")
    month, day = int(month_s), int(day_s)
    # Validates the pair against a leap year so 02-29 is accepted.
    date(2024, month, day)
    return month, day


def parse_calendar_policy(data: dict[str, Any]) -> WorkCalendarPolicy:
    """Build a ``WorkCalendarPolicy`` from the parsed YAML document."""
    cal = data.get("calendar") or {}
    leave = data.get("leave") or {}

    kwargs: dict[str, Any] = {}
    for key in (
        "standard_hours_per_day",
        "morning_session_hours",
        "afternoon_session_hours",
        "overtime_multiplier",
    ):
        if key in cal:
            kwargs[key] = parse_decimal(key, cal[key])

    if "weekend_days" in cal:
        kwargs["weekend_days"] = frozenset(
            parse_weekday(v) for v in cal["weekend_days"] or []
        )
    if "public_holidays" in cal:
        kwargs["public_holidays"] = frozenset(
            parse_date(v) for v in cal["public_holidays"] or []
        )
    if "recurring_holidays" in cal:
        kwargs["recurring_holidays"] = frozenset(
            parse_month_day(v) for v in cal["recurring_holidays"] or []
        )
    if "default_annual_leave_days" in leave:
        kwargs["default_annual_leave_days"] = parse_decimal(
            "default_annual_leave_days", leave["default_annual_leave_days"],
        )

    return WorkCalendarPolicy(**kwargs)


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
