"""
payroll_config -- single public entrypoint for payroll configuration.

Responsibility:
    Provides the ONLY way to obtain the work-calendar policy at runtime
    through ``get_calendar_policy()``.  No other component reads YAML
    files or environment variables directly.

Architecture position:
    Configuration -- sits above ``payroll_kernel`` and below
    ``payroll_engines`` / ``payroll_modules`` / ``payroll_services``.
    The kernel MUST NEVER import from ``payroll_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``ValueError`` -- a value cannot be parsed.
    - ``InvalidCalendarPolicyError`` -- the parsed policy is inconsistent.

Audit relevance:
    Every successful ``get_calendar_policy()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the source path and the
    SHA-256 checksum of the parsed document, which ties every computed
    salary back to the calendar that governed it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from payroll_config.loader import compute_checksum, load_yaml_file, parse_calendar_policy
from payroll_kernel.domain.calendar import WorkCalendarPolicy

_logger = logging.getLogger("payroll_kernel.config")

DEFAULT_CALENDAR_FILE = Path(__file__).parent / "calendar.yaml"


def get_calendar_policy(path: Path | str | None = None) -> WorkCalendarPolicy:
    """Load and validate the work-calendar policy.

    Args:
        path: YAML file to read.  Defaults to ``payroll_config/calendar.yaml``.

    Returns:
        A frozen ``WorkCalendarPolicy``.
    """
    source = Path(path) if path is not None else DEFAULT_CALENDAR_FILE
    data = load_yaml_file(source)
    policy = parse_calendar_policy(data)

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "source": str(source),
            "checksum": compute_checksum(data),
            "standard_hours_per_day": str(policy.standard_hours_per_day),
            "weekend_days": sorted(policy.weekend_days),
            "holiday_count": len(policy.public_holidays) + len(policy.recurring_holidays),
        },
    )
    return policy


__all__ = ["get_calendar_policy", "DEFAULT_CALENDAR_FILE"]
