"""
Payroll Kernel

Shared foundation for the monthly payroll engine:
- Typed exception hierarchy with machine-readable codes
- Structured JSON logging
- Database base classes, engine and session scope
- Pure domain objects (clock, work calendar, domain events)
"""

__version__ = "0.1.0"
