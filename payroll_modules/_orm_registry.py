"""
Module ORM Registry (``payroll_modules._orm_registry``).

Ensure all module-level SQLAlchemy ORM models are imported so that
``Base.metadata`` contains their table definitions before
``create_tables()`` runs.

Architecture position
---------------------
**Modules layer** -- utility.  Imported lazily by
``payroll_kernel.db.engine.create_tables``.
"""


def import_all_orm_models() -> None:
    """Import every ``payroll_modules.*.orm`` module.  Idempotent."""
    # Employees first: every other table has a FK to payroll_employees.
    import payroll_modules.employees.orm  # noqa: F401
    import payroll_modules.attendance.orm  # noqa: F401
    import payroll_modules.leave.orm  # noqa: F401
    import payroll_modules.rewards.orm  # noqa: F401
    import payroll_modules.payroll.orm  # noqa: F401
