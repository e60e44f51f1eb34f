"""
Structured JSON logging for the payroll kernel.

Every record under the ``payroll_kernel`` logger is written as one JSON line.
Records emitted while a payslip is computed carry the employee and the
period (``YYYY-MM``) they belong to, so one employee's month can be pulled
out of a batch log with a single filter.

A payroll exception logged with ``exc_info`` is flattened into ``exc_*``
fields: its ``code``, its family (``ConflictError``, ``ComputationError``,
...) and every structured attribute, e.g. ``exc_session_id`` for a corrupt
attendance session or ``exc_remaining`` / ``exc_requested`` for an
insufficient leave balance.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "exception_fields",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any
from uuid import UUID

from payroll_kernel.exceptions import PayrollKernelError

_LOGGER_PREFIX = "payroll_kernel"

_CONTEXT_FIELDS = ("correlation_id", "actor_id", "employee_id", "period")
_EMPTY: Mapping[str, str] = MappingProxyType({})
_context: ContextVar[Mapping[str, str]] = ContextVar("payroll_log_context", default=_EMPTY)


def _context_value(name: str, value: Any) -> str:
    if name == "period" and isinstance(value, tuple):
        year, month = value
        return f"{year:04d}-{month:02d}"
    return str(value)


def _merge(fields: Mapping[str, Any]) -> Mapping[str, str]:
    unknown = sorted(set(fields) - set(_CONTEXT_FIELDS))
    if unknown:
        raise TypeError(f"unknown log context field(s): {', '.join(unknown)}")
    merged = dict(_context.get())
    for name, value in fields.items():
        if value is not None:
            merged[name] = _context_value(name, value)
    return MappingProxyType(merged)


class LogContext:
    """
    Context-local fields stamped on every payroll log record.

    Values may be UUIDs; ``period`` may be a ``(year, month)`` tuple.  All
    are stored as strings.  The context is a ``ContextVar`` so concurrent
    payroll runs in threads or tasks never see each other's employee.
    """

    @staticmethod
    def get_all() -> dict[str, str]:
        return dict(_context.get())

    @staticmethod
    def set(**fields: Any) -> None:
        """Merge fields into the current context; None values are skipped."""
        _context.set(_merge(fields))

    @staticmethod
    def clear() -> None:
        _context.set(_EMPTY)

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """Add fields for the duration of a block, then restore the previous context."""
        token = _context.set(_merge(fields))
        try:
            yield
        finally:
            _context.reset(token)

    @staticmethod
    def payslip(employee_id: UUID, year: int, month: int):
        """Bind the employee and month a salary computation belongs to."""
        return LogContext.bind(employee_id=employee_id, period=(year, month))


def _family(exc_type: type[PayrollKernelError]) -> str:
    for cls in exc_type.__mro__:
        if PayrollKernelError in cls.__bases__:
            return cls.__name__
    return exc_type.__name__


def exception_fields(exc: BaseException) -> dict[str, Any]:
    """Flatten an exception into the ``exc_*`` fields of a log record."""
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, PayrollKernelError):
        fields["exc_code"] = exc.code
        fields["exc_family"] = _family(type(exc))
    for name, value in vars(exc).items():
        if not name.startswith("_"):
            fields[f"exc_{name}"] = value
    return fields


def _to_json(value: Any) -> Any:
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


_RESERVED: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: header, context, extras, then exception."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context.get(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and key not in payload:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_installed: logging.Handler | None = None
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> logging.Handler:
    """
    Install the JSON handler on ``payroll_kernel`` once per process.

    Later calls return the handler already installed and change nothing;
    ``init_engine_from_url`` calls this so any entry point gets JSON logs.
    """
    global _installed
    with _lock:
        if _installed is not None:
            return _installed
        _installed = handler or logging.StreamHandler(stream or sys.stderr)
        _installed.setFormatter(StructuredFormatter())

        root = logging.getLogger(_LOGGER_PREFIX)
        root.setLevel(level)
        root.propagate = False
        root.addHandler(_installed)
        return _installed


def reset_logging() -> None:
    """Remove the installed handler so the next ``configure_logging`` reinstalls. Tests only."""
    global _installed
    with _lock:
        root = logging.getLogger(_LOGGER_PREFIX)
        if _installed is not None:
            root.removeHandler(_installed)
        _installed = None
        root.setLevel(logging.WARNING)
