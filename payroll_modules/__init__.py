"""
Payroll Modules.

Per-aggregate packages over the payroll kernel and engines.  Each module
contains:
- Domain models (frozen dataclasses, the nouns)
- ORM persistence models with to_dto()/from_dto()
- A service owning the transaction boundary for its aggregate

Modules:
- Employees: employment terms and profile lookup
- Attendance: session records, monthly aggregation, session materializer
- Leave: leave requests, balances, monthly summaries
- Rewards: reward days and bonuses
- Payroll: salary breakdowns and persisted salary reports
"""
