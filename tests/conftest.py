from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceEntry, WorkAssignment
from src.attendance_ledger.attendance_ledger.container import build_container_from_repositories
from src.attendance_ledger.attendance_ledger.core.enums import WorkType
from src.attendance_ledger.attendance_ledger.core.exceptions import BackendError, ConflictError
from src.attendance_ledger.attendance_ledger.departments.model import Department
from src.attendance_ledger.attendance_ledger.employees.model import Employee, PaymentStatusRecord
from src.attendance_ledger.attendance_ledger.history.model import HistoryPoint

# Thursday
HORIZON = date(2025, 3, 20)


class FakeEmployeesRepo:
    def __init__(self):
        self.items: dict[str, Employee] = {}
        self.calls: list[tuple] = []
        self.reject_payment_for: set[str] = set()

    def put(self, emp: Employee) -> Employee:
        self.items[emp.name] = emp
        return emp

    def list_all(self):
        return list(self.items.values())

    def create(self, *, name, base_salary, start_date, department):
        self.calls.append(("create", name))
        return self.put(Employee(name=name, base_salary=base_salary, start_date=start_date, department=department))

    def update_department(self, *, name, department):
        self.calls.append(("update_department", name, department))
        return self.put(replace(self.items[name], department=department))

    def set_end_date(self, *, name, end_date):
        self.calls.append(("set_end_date", name, end_date))
        return self.put(replace(self.items[name], end_date=end_date))

    def update_salary(self, *, name, salary, effective_date):
        self.calls.append(("update_salary", name, salary, effective_date))
        emp = self.items[name]
        history = emp.salary_history + (HistoryPoint(value=salary, effective_date=effective_date),)
        return self.put(replace(emp, salary_history=history))

    def update_payment_status(self, *, name, month, status, method=None):
        if name in self.reject_payment_for:
            raise ConflictError(f"Payment for {name} is locked")
        self.calls.append(("update_payment_status", name, month, status, method))
        emp = self.items[name]
        records = tuple(r for r in emp.payment_status if r.month != month)
        records += (PaymentStatusRecord(month=month, status=status, method=method),)
        return self.put(replace(emp, payment_status=records))


class FakeDepartmentsRepo:
    def __init__(self):
        self.items: dict[str, Department] = {}
        self.calls: list[tuple] = []

    def put(self, dept: Department) -> Department:
        self.items[dept.name] = dept
        return dept

    def list_all(self):
        return list(self.items.values())

    def update_hours(self, *, name, hours, effective_date):
        self.calls.append(("update_hours", name, hours, effective_date))
        dept = self.items[name]
        history = dept.hours_history + (HistoryPoint(value=hours, effective_date=effective_date),)
        return self.put(replace(dept, hours=hours, hours_history=history))


class FakeHolidaysRepo:
    def __init__(self):
        self.dates: set[date] = set()

    def list_dates(self):
        return sorted(self.dates)


class FakeEntriesRepo:
    """Writes entries into the employees fake; ``fail_on`` dates raise like a dead server."""

    def __init__(self, employees: FakeEmployeesRepo):
        self._employees = employees
        self.saved: list[tuple[str, date, WorkAssignment]] = []
        self.mass: list[tuple[str, date, float]] = []
        self.fail_on: set[date] = set()

    def save_entry(self, *, employee_name, work_date, assignment):
        if work_date in self.fail_on:
            raise BackendError("Error contacting server: connection reset")
        self.saved.append((employee_name, work_date, assignment))
        emp = self._employees.items[employee_name]
        hours = assignment.hours if assignment.work_type == WorkType.CUSTOM_HOURS else 8.0
        entries = tuple(e for e in emp.entries if e.work_date != work_date)
        entries += (AttendanceEntry(work_date=work_date, assignment=assignment, hours=hours),)
        return self._employees.put(replace(emp, entries=entries))

    def create_mass_entries(self, *, department, work_date, hours):
        self.mass.append((department, work_date, hours))
        return [
            self.save_entry(employee_name=emp.name, work_date=work_date, assignment=WorkAssignment.custom_hours(hours))
            for emp in list(self._employees.items.values())
            if emp.department == department and emp.is_active_on(work_date)
        ]


class FakeStore:
    def __init__(self):
        self.employees = FakeEmployeesRepo()
        self.departments = FakeDepartmentsRepo()
        self.holidays = FakeHolidaysRepo()
        self.entries = FakeEntriesRepo(self.employees)

    def add_department(self, name: str, hours: float = 8.0, history=()) -> Department:
        return self.departments.put(Department(name=name, hours=hours, hours_history=tuple(history)))

    def add_employee(self, name: str, *, start: date, department: str = "Kitchen", salary: float = 26000.0, **kw) -> Employee:
        return self.employees.put(
            Employee(name=name, base_salary=salary, start_date=start, department=department, **kw)
        )


@pytest.fixture
def horizon() -> date:
    return HORIZON


@pytest.fixture
def store() -> FakeStore:
    s = FakeStore()
    s.add_department("Kitchen", 8.0)
    s.add_department("Front", 10.0)
    return s


@pytest.fixture
def container(store):
    return build_container_from_repositories(
        employees_repo=store.employees,
        departments_repo=store.departments,
        holidays_repo=store.holidays,
        entries_repo=store.entries,
    )
