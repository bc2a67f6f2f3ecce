from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .departments.model import Department
from .departments.repository import DepartmentRepository
from .employees.model import Employee
from .employees.repository import EmployeeRepository
from .holidays.repository import HolidayRepository


@dataclass(frozen=True)
class Snapshot:
    """One consistent copy of the store's employees, departments and holidays."""

    employees: tuple[Employee, ...] = ()
    departments: tuple[Department, ...] = ()
    holidays: frozenset[date] = field(default_factory=frozenset)

    def employee(self, name: str) -> Optional[Employee]:
        for emp in self.employees:
            if emp.name == name:
                return emp
        return None

    def department(self, name: str) -> Optional[Department]:
        for dept in self.departments:
            if dept.name == name:
                return dept
        return None

    def department_of(self, employee: Employee) -> Optional[Department]:
        return self.department(employee.department)

    def employees_active_in_month(self, month: str) -> list[Employee]:
        return [emp for emp in self.employees if emp.is_active_in_month(month)]

    def departments_with_employees(self, month: str) -> list[str]:
        """Department names with at least one employee active in ``month``, first-seen order."""
        names: list[str] = []
        for emp in self.employees_active_in_month(month):
            if emp.department not in names:
                names.append(emp.department)
        return names

    def department_roster(self, department: str, month: str) -> list[Employee]:
        return [emp for emp in self.employees_active_in_month(month) if emp.department == department]


class SnapshotSession:
    """Holds the current snapshot; ``refresh`` replaces it wholesale.

    Services call ``refresh`` after every mutating operation instead of
    patching the snapshot, so store-computed fields (pay) never drift.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        holidays: HolidayRepository,
    ):
        self._employees = employees
        self._departments = departments
        self._holidays = holidays
        self._snapshot: Optional[Snapshot] = None

    @property
    def snapshot(self) -> Snapshot:
        if self._snapshot is None:
            return self.refresh()
        return self._snapshot

    def refresh(self) -> Snapshot:
        departments = tuple(self._departments.list_all())
        employees = tuple(self._employees.list_all())
        holidays = frozenset(self._holidays.list_dates())
        self._snapshot = Snapshot(employees=employees, departments=departments, holidays=holidays)
        return self._snapshot
