from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.validators import require_max_length, require_non_empty, require_not_future
from ..core.constants import MAX_NAME_LENGTH, MIN_BASE_SALARY
from ..core.exceptions import ValidationError
from ..history.model import HistoryPoint
from ..history.resolver import current_value, ensure_new_effective_date, sorted_history
from ..snapshot import SnapshotSession
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use cases that change employee records.

    Every check runs against the current snapshot before any request is
    sent; after a successful request the snapshot is fetched again.
    """

    def __init__(self, employees: EmployeeRepository, session: SnapshotSession):
        self._employees = employees
        self._session = session

    def _require_employee(self, name: Optional[str]) -> Employee:
        if not name:
            raise ValidationError("Please select an employee.")
        emp = self._session.snapshot.employee(name)
        if emp is None:
            raise ValidationError(f'Employee "{name}" not found.')
        return emp

    @staticmethod
    def _require_salary(value: Optional[float], label: str) -> float:
        if not value or value < MIN_BASE_SALARY:
            raise ValidationError(f"{label} must be at least {MIN_BASE_SALARY}.")
        return float(value)

    def add_employee(
        self,
        *,
        name: str,
        base_salary: Optional[float],
        start_date: Optional[date],
        department: Optional[str],
        horizon: date,
    ) -> Employee:
        name = require_max_length(require_non_empty(name, "Employee name"), "Employee name", MAX_NAME_LENGTH)
        snapshot = self._session.snapshot
        if any(emp.name.lower() == name.lower() for emp in snapshot.employees):
            raise ValidationError("Employee name must be unique.")
        salary = self._require_salary(base_salary, "Salary")
        start_date = require_not_future(start_date, "Start date", horizon)
        if not department:
            raise ValidationError("Please select a department.")
        if snapshot.department(department) is None:
            raise ValidationError(f'Department "{department}" does not exist.')

        created = self._employees.create(name=name, base_salary=salary, start_date=start_date, department=department)
        self._session.refresh()
        return created

    def transfer_department(self, *, name: str, department: Optional[str]) -> Employee:
        emp = self._require_employee(name)
        if not department:
            raise ValidationError("Please select a new department.")
        if self._session.snapshot.department(department) is None:
            raise ValidationError(f'Department "{department}" does not exist.')
        if emp.department == department:
            raise ValidationError("Employee is already in this department.")

        updated = self._employees.update_department(name=emp.name, department=department)
        self._session.refresh()
        return updated

    def mark_inactive(self, *, name: str, end_date: Optional[date], horizon: date) -> Employee:
        emp = self._require_employee(name)
        if end_date is None:
            raise ValidationError("Please select an end date.")
        if end_date < emp.start_date:
            raise ValidationError("End date must be after start date.")
        require_not_future(end_date, "End date", horizon)

        updated = self._employees.set_end_date(name=emp.name, end_date=end_date)
        self._session.refresh()
        return updated

    def update_salary(
        self,
        *,
        name: str,
        salary: Optional[float],
        horizon: date,
        effective_date: Optional[date] = None,
    ) -> Employee:
        emp = self._require_employee(name)
        salary = self._require_salary(salary, "New salary")
        if salary == current_value(emp.salary_history, emp.base_salary, horizon):
            raise ValidationError("New salary must be different from current salary.")
        effective_date = require_not_future(effective_date or horizon, "Effective date", horizon)
        ensure_new_effective_date(emp.salary_history, effective_date)

        updated = self._employees.update_salary(name=emp.name, salary=salary, effective_date=effective_date)
        self._session.refresh()
        return updated

    def salary_history(self, name: str) -> list[HistoryPoint]:
        return sorted_history(self._require_employee(name).salary_history)
