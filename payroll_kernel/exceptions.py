"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Payroll callers (the HTTP layer, batch jobs, report generation) must react to
errors precisely: a conflicting leave request is shown to the employee, an
insufficient balance is displayed with both numbers, a corrupt attendance
session is routed to manual review.  Parsing message strings for that is
fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        leave_service.create_leave_request(...)
    except InsufficientLeaveBalanceError as e:
        api_response(code=e.code, remaining=e.remaining, requested=e.requested)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidPeriodError
    |   +-- InvalidCalendarPolicyError
    |   +-- LeaveValidationError
    |   +-- NoWorkingDayError
    |   +-- RewardValidationError
    |
    +-- ConflictError
    |   +-- OverlappingLeaveError
    |   +-- DuplicateRewardError
    |   +-- InvalidStatusTransitionError
    |   +-- ReportLockedError
    |
    +-- InsufficientBalanceError
    |   +-- InsufficientLeaveBalanceError
    |
    +-- NotFoundError
    |   +-- EmployeeNotFoundError
    |   +-- LeaveNotFoundError
    |   +-- RewardNotFoundError
    |   +-- ReportNotFoundError
    |
    +-- ComputationError
        +-- CorruptSessionRecordError
        +-- SalaryComputationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category      | Code                        | When Raised
--------------|-----------------------------|-------------------------------------
Validation    | INVALID_PERIOD              | Month not in 1..12 / year out of range
              | INVALID_CALENDAR_POLICY     | Inconsistent work calendar settings
              | INVALID_LEAVE_REQUEST       | Half-day without slot, start > end
              | NO_WORKING_DAY              | Leave range contains no work day
              | INVALID_REWARD              | Malformed or negative bonus
--------------|-----------------------------|-------------------------------------
Conflict      | LEAVE_OVERLAP               | Overlaps a PENDING/APPROVED request
              | DUPLICATE_REWARD            | Reward already exists for that date
              | INVALID_STATUS_TRANSITION   | e.g. approving a rejected leave
              | REPORT_LOCKED               | Regenerating a PAID salary report
--------------|-----------------------------|-------------------------------------
Balance       | INSUFFICIENT_LEAVE_BALANCE  | remaining < requested
--------------|-----------------------------|-------------------------------------
Not found     | EMPLOYEE_NOT_FOUND          | Unknown employee id
              | LEAVE_NOT_FOUND             | Unknown leave request id
              | REWARD_NOT_FOUND            | Unknown reward id
              | REPORT_NOT_FOUND            | Unknown salary report id
--------------|-----------------------------|-------------------------------------
Computation   | CORRUPT_SESSION_RECORD      | Check-out before check-in
              | SALARY_COMPUTATION_FAILED   | Month without work days, etc.

===============================================================================
HANDLING PATTERNS
===============================================================================

1. Validation and conflict errors are raised BEFORE any mutation and are
   never retried.

2. Batch payroll (``MonthlyPayrollEngine.calculate_all_salaries``) catches
   per employee and records ``(employee_id, code, message)``; the batch
   continues.

3. ComputationError means an upstream data problem.  The offending record
   is flagged for manual review; the error is logged and surfaced.

===============================================================================
"""

from decimal import Decimal


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Validation exceptions


class ValidationError(PayrollKernelError):
    """Malformed input; surfaced before any computation or mutation."""

    code: str = "VALIDATION_ERROR"


class InvalidPeriodError(ValidationError):
    """Year/month pair is not a valid payroll period."""

    code: str = "INVALID_PERIOD"

    def __init__(self, year: int, month: int):
        self.year = year
        self.month = month
        super().__init__(f"Invalid payroll period: year={year}, month={month}")


class InvalidCalendarPolicyError(ValidationError):
    """Work calendar policy settings are inconsistent."""

    code: str = "INVALID_CALENDAR_POLICY"

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid calendar policy field '{field_name}': {reason}")


class LeaveValidationError(ValidationError):
    """Leave request fields are malformed."""

    code: str = "INVALID_LEAVE_REQUEST"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid leave request: {reason}")


class NoWorkingDayError(ValidationError):
    """Requested leave range contains no work day."""

    code: str = "NO_WORKING_DAY"

    def __init__(self, start_date: str, end_date: str):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"No working day in range {start_date} to {end_date}"
        )


class RewardValidationError(ValidationError):
    """Reward grant fields are malformed."""

    code: str = "INVALID_REWARD"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid reward: {reason}")


# Conflict exceptions


class ConflictError(PayrollKernelError):
    """Request conflicts with existing state."""

    code: str = "CONFLICT"


class OverlappingLeaveError(ConflictError):
    """A PENDING or APPROVED leave already covers part of the range."""

    code: str = "LEAVE_OVERLAP"

    def __init__(self, employee_id: str, conflicting_leave_id: str):
        self.employee_id = employee_id
        self.conflicting_leave_id = conflicting_leave_id
        super().__init__(
            f"Leave request for employee {employee_id} overlaps "
            f"existing request {conflicting_leave_id}"
        )


class DuplicateRewardError(ConflictError):
    """A reward day already exists for this employee and date."""

    code: str = "DUPLICATE_REWARD"

    def __init__(self, employee_id: str, reward_date: str, existing_reward_id: str):
        self.employee_id = employee_id
        self.reward_date = reward_date
        self.existing_reward_id = existing_reward_id
        super().__init__(
            f"Reward already exists for employee {employee_id} on {reward_date} "
            f"({existing_reward_id})"
        )


class InvalidStatusTransitionError(ConflictError):
    """Entity cannot move from its current status to the requested one."""

    code: str = "INVALID_STATUS_TRANSITION"

    def __init__(self, entity_type: str, entity_id: str, from_status: str, to_status: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot move {entity_type} {entity_id} from {from_status} to {to_status}"
        )


class ReportLockedError(ConflictError):
    """Salary report has been paid and can no longer be regenerated."""

    code: str = "REPORT_LOCKED"

    def __init__(self, report_id: str, status: str):
        self.report_id = report_id
        self.status = status
        super().__init__(f"Salary report {report_id} is {status} and cannot be regenerated")


# Balance exceptions


class InsufficientBalanceError(PayrollKernelError):
    """Balance too low for the requested operation."""

    code: str = "INSUFFICIENT_BALANCE"


class InsufficientLeaveBalanceError(InsufficientBalanceError):
    """Annual leave balance cannot cover the requested duration."""

    code: str = "INSUFFICIENT_LEAVE_BALANCE"

    def __init__(self, remaining: Decimal, requested: Decimal):
        self.remaining = remaining
        self.requested = requested
        super().__init__(
            f"Insufficient leave balance (remaining: {_fmt(remaining)}, "
            f"requested: {_fmt(requested)})"
        )


# Not-found exceptions


class NotFoundError(PayrollKernelError):
    """Referenced entity does not exist."""

    code: str = "NOT_FOUND"


class EmployeeNotFoundError(NotFoundError):
    """Employee with given ID was not found."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: str):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


class LeaveNotFoundError(NotFoundError):
    """Leave request with given ID was not found."""

    code: str = "LEAVE_NOT_FOUND"

    def __init__(self, leave_id: str):
        self.leave_id = leave_id
        super().__init__(f"Leave request not found: {leave_id}")


class RewardNotFoundError(NotFoundError):
    """Reward with given ID was not found."""

    code: str = "REWARD_NOT_FOUND"

    def __init__(self, reward_id: str):
        self.reward_id = reward_id
        super().__init__(f"Reward not found: {reward_id}")


class ReportNotFoundError(NotFoundError):
    """Salary report with given ID was not found."""

    code: str = "REPORT_NOT_FOUND"

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Salary report not found: {report_id}")


# Computation exceptions


class ComputationError(PayrollKernelError):
    """Unexpected internal failure during aggregation or calculation."""

    code: str = "COMPUTATION_ERROR"


class CorruptSessionRecordError(ComputationError):
    """
    Attendance session has inconsistent timestamps.

    The session is flagged for manual review; it is never skipped silently.
    """

    code: str = "CORRUPT_SESSION_RECORD"

    def __init__(self, session_id: str, reason: str):
        self.session_id = session_id
        self.reason = reason
        super().__init__(f"Corrupt attendance session {session_id}: {reason}")


class SalaryComputationError(ComputationError):
    """Salary calculation received inputs it cannot compute from."""

    code: str = "SALARY_COMPUTATION_FAILED"

    def __init__(self, employee_id: str, reason: str):
        self.employee_id = employee_id
        self.reason = reason
        super().__init__(f"Salary computation failed for {employee_id}: {reason}")


def _fmt(value: Decimal) -> str:
    # Numeric columns come back with a fixed scale; 13.000000000 -> "13"
    return f"{Decimal(value).normalize():f}"
