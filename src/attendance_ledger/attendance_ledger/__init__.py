"""Attendance Ledger package.

Temporal record resolution and attendance aggregation for an organization's
attendance and payroll grid. Feature modules (attendance, employees,
departments, payroll, ...) keep domain logic in services, talk to the
persistence collaborator through repository interfaces, and expose a thin
Flask controller layer.
"""
