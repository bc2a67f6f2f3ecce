from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, Iterable, Optional

from ..calendar_rules.engine import CalendarRuleEngine
from ..common.datetime_utils import iter_days, iter_months, month_bounds
from ..core.constants import DEFAULT_DEPARTMENT_HOURS
from ..departments.model import Department
from ..employees.model import Employee, PaymentStatusRecord
from ..history.resolver import resolve_as_of


@dataclass(frozen=True)
class MonthSummary:
    employee_name: str
    month: str
    total_hours: float
    total_pay: float
    expected_hours: float
    expected_pay: float
    variance: float
    payment_status: PaymentStatusRecord


def covered_months(employees: Iterable[Employee], horizon: date) -> list[str]:
    """YYYY-MM keys from the earliest start date's month to the horizon's month, newest first."""
    starts = [emp.start_date for emp in employees]
    if not starts:
        return []
    months = list(iter_months(min(starts), horizon))
    months.reverse()
    return months


class MonthlyAggregator:
    """Expected vs. actual hours and pay per employee and month.

    Hours and pay on entries come from the store and are only summed here.
    """

    def __init__(
        self,
        holidays: Iterable[date],
        *,
        horizon: date,
        regular_weekdays: Optional[AbstractSet[int]] = None,
    ):
        self._horizon = horizon
        self._engine = CalendarRuleEngine(holidays, horizon=horizon, regular_weekdays=regular_weekdays)

    def expected_hours(self, employee: Employee, department: Optional[Department], month: str) -> float:
        first, last = month_bounds(month)
        start = max(first, employee.start_date)
        end = min(last, employee.end_date or self._horizon, self._horizon)

        total = 0.0
        for day in iter_days(start, end):
            if not self._engine.is_working_day(day, employee):
                continue
            if department is None:
                total += DEFAULT_DEPARTMENT_HOURS
            else:
                total += resolve_as_of(department.hours_history, department.hours, day)
        return total

    def expected_pay(self, employee: Employee, month: str) -> float:
        # Salary in force on the first day of the month applies to the whole month.
        first, _ = month_bounds(month)
        return resolve_as_of(employee.salary_history, employee.base_salary, first)

    def compute_month_summary(self, employee: Employee, department: Optional[Department], month: str) -> MonthSummary:
        entries = employee.entries_in_month(month)
        total_hours = sum(e.hours for e in entries)
        total_pay = sum(e.pay for e in entries)
        expected_pay = self.expected_pay(employee, month)

        return MonthSummary(
            employee_name=employee.name,
            month=month,
            total_hours=total_hours,
            total_pay=total_pay,
            expected_hours=self.expected_hours(employee, department, month),
            expected_pay=expected_pay,
            variance=total_pay - expected_pay,
            payment_status=employee.payment_status_for(month),
        )

    def employee_history(
        self,
        employee: Employee,
        department: Optional[Department],
        months: Iterable[str],
    ) -> list[MonthSummary]:
        """Summaries for the given months, skipping months the employee was not active in."""
        return [
            self.compute_month_summary(employee, department, month)
            for month in months
            if employee.is_active_in_month(month)
        ]
