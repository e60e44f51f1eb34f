"""
Pytest fixtures for the payroll test suite.

Each test gets its own in-memory SQLite database (StaticPool, SAVEPOINT
support enabled by ``init_engine_from_url``).  Set ``DATABASE_URL`` to a
PostgreSQL URL to run the same suite against the production backend;
tables are dropped after every test in that case.
"""

import json
import logging
import os
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session

from payroll_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from payroll_modules.attendance.models import SessionSlot, SessionStatus
from payroll_modules.attendance.orm import AttendanceSessionModel
from payroll_modules.employees.models import ContractType, EmployeeProfile
from payroll_modules.employees.service import EmployeeDirectory

TEST_ACTOR_ID = UUID("00000000-0000-0000-0000-000000000001")


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture payroll_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, monthly_engine):
            monthly_engine.calculate_monthly_salary(...)
            logs = captured_logs()
            assert any(r["message"] == "salary_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("payroll_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", "sqlite:///:memory:")


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """A session on a freshly created schema, torn down after the test."""
    init_engine_from_url(get_database_url())
    create_tables()
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.rollback()
        db_session.close()
        drop_tables()
        reset_engine()


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def policy() -> WorkCalendarPolicy:
    return DEFAULT_POLICY


@pytest.fixture
def test_actor_id() -> UUID:
    return TEST_ACTOR_ID


@pytest.fixture
def make_employee(session):
    """
    Insert and commit an employee profile.

    Usage::

        employee = make_employee(base_salary=Decimal("1500"))
    """
    counter = {"n": 0}

    def _make(
        base_salary: Decimal = Decimal("1500"),
        hourly_rate: Decimal = Decimal("0"),
        contract_type: ContractType = ContractType.CDI,
        annual_leave_days: Decimal | None = None,
        is_active: bool = True,
        employee_number: str | None = None,
        first_name: str = "Test",
        last_name: str | None = None,
    ) -> EmployeeProfile:
        counter["n"] += 1
        number = employee_number or f"EMP{counter['n']:04d}"
        profile = EmployeeProfile(
            id=uuid4(),
            employee_number=number,
            first_name=first_name,
            last_name=last_name or f"Employee {counter['n']}",
            base_salary=base_salary,
            hourly_rate=hourly_rate,
            contract_type=contract_type,
            annual_leave_days=annual_leave_days,
            department="Operations",
            position="Agent",
            hire_date=date(2024, 1, 1),
            is_active=is_active,
        )
        created = EmployeeDirectory(session).add(profile)
        session.commit()
        return created

    return _make


@pytest.fixture
def add_session(session):
    """
    Insert and commit one raw attendance session row.

    Bypasses ``AttendanceService.record_session`` so tests can store rows
    the service would never produce (check-out before check-in).
    """

    def _add(
        employee_id: UUID,
        session_date: date,
        slot: SessionSlot,
        status: SessionStatus = SessionStatus.FULL,
        check_in=None,
        check_out=None,
        duration_minutes: int = 240,
    ) -> AttendanceSessionModel:
        model = AttendanceSessionModel(
            employee_id=employee_id,
            session_date=session_date,
            slot=slot.value,
            status=status.value,
            check_in=check_in,
            check_out=check_out,
            duration_minutes=duration_minutes,
        )
        session.add(model)
        session.commit()
        return model

    return _add


@pytest.fixture
def work_full_days(add_session):
    """Record MORNING and AFTERNOON FULL sessions (240 min each) on given dates."""

    def _work(employee_id: UUID, days) -> None:
        for day in days:
            add_session(employee_id, day, SessionSlot.MORNING)
            add_session(employee_id, day, SessionSlot.AFTERNOON)

    return _work
