from __future__ import annotations

from datetime import date

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceEntry, WorkAssignment
from src.attendance_ledger.attendance_ledger.core.enums import PaymentStatus
from src.attendance_ledger.attendance_ledger.departments.model import Department
from src.attendance_ledger.attendance_ledger.employees.model import Employee
from src.attendance_ledger.attendance_ledger.history.model import HistoryPoint
from src.attendance_ledger.attendance_ledger.payroll.aggregator import MonthlyAggregator, covered_months

HORIZON = date(2025, 3, 20)
KITCHEN = Department(name="Kitchen", hours=8)


def _emp(**kw) -> Employee:
    defaults = dict(name="An", base_salary=60000, start_date=date(2025, 2, 1), department="Kitchen")
    defaults.update(kw)
    return Employee(**defaults)


def _full_days(month_days, pay):
    return tuple(
        AttendanceEntry(work_date=d, assignment=WorkAssignment.full_day(), hours=8, pay=pay) for d in month_days
    )


def test_full_month_of_full_days_has_no_variance():
    # March 2025: 26 Monday-Saturday days.
    days = [date(2025, 3, d) for d in range(1, 32) if date(2025, 3, d).weekday() != 6]
    emp = _emp(entries=_full_days(days, 60000 / 26))
    agg = MonthlyAggregator([], horizon=date(2025, 4, 30))

    s = agg.compute_month_summary(emp, KITCHEN, "2025-03")

    assert len(days) == 26
    assert s.total_hours == 26 * 8
    assert s.expected_hours == 26 * 8
    assert s.expected_pay == 60000
    assert s.variance == pytest.approx(0, abs=1e-6)


def test_expected_hours_follow_department_history_per_day():
    # Base 8 until the change on Monday 2025-02-17, 10 from then on.
    dept = Department(
        name="Kitchen",
        hours=8,
        hours_history=(HistoryPoint(value=10, effective_date=date(2025, 2, 17)),),
    )
    agg = MonthlyAggregator([], horizon=HORIZON)

    assert agg.expected_hours(_emp(), dept, "2025-02") == 13 * 8 + 11 * 10


def test_expected_hours_stop_at_horizon_and_end_date():
    agg = MonthlyAggregator([], horizon=HORIZON)
    assert agg.expected_hours(_emp(), KITCHEN, "2025-03") == 17 * 8
    assert agg.expected_hours(_emp(end_date=date(2025, 3, 8)), KITCHEN, "2025-03") == 7 * 8


def test_holidays_are_not_expected():
    agg = MonthlyAggregator([date(2025, 3, 5)], horizon=HORIZON)
    assert agg.expected_hours(_emp(), KITCHEN, "2025-03") == 16 * 8


def test_unknown_department_falls_back_to_default_hours():
    agg = MonthlyAggregator([], horizon=HORIZON)
    assert agg.expected_hours(_emp(start_date=date(2025, 3, 17)), None, "2025-03") == 4 * 12


def test_expected_pay_uses_salary_in_force_on_first_of_month():
    emp = _emp(
        base_salary=50000,
        salary_history=(
            HistoryPoint(value=55000, effective_date=date(2025, 2, 1)),
            HistoryPoint(value=70000, effective_date=date(2025, 2, 2)),
        ),
    )
    agg = MonthlyAggregator([], horizon=HORIZON)
    assert agg.expected_pay(emp, "2025-01") == 50000
    assert agg.expected_pay(emp, "2025-02") == 55000
    assert agg.expected_pay(emp, "2025-03") == 70000


def test_summary_carries_payment_status_default():
    s = MonthlyAggregator([], horizon=HORIZON).compute_month_summary(_emp(), KITCHEN, "2025-03")
    assert s.payment_status.status == PaymentStatus.UNPAID
    assert s.total_pay == 0


def test_covered_months_from_earliest_start_to_horizon_newest_first():
    emps = [_emp(start_date=date(2024, 11, 20)), _emp(name="Binh", start_date=date(2025, 3, 1))]
    months = covered_months(emps, HORIZON)
    assert months == ["2025-03", "2025-02", "2025-01", "2024-12", "2024-11"]


def test_covered_months_across_years_counts_every_month():
    months = covered_months([_emp(start_date=date(2023, 1, 31))], HORIZON)
    assert len(months) == 12 * 2 + 3
    assert len(set(months)) == len(months)


def test_no_employees_covers_no_months():
    assert covered_months([], HORIZON) == []


def test_employee_history_skips_months_before_start():
    agg = MonthlyAggregator([], horizon=HORIZON)
    history = agg.employee_history(_emp(), KITCHEN, ["2025-03", "2025-02", "2025-01"])
    assert [s.month for s in history] == ["2025-03", "2025-02"]
