from __future__ import annotations

from datetime import date

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceEntry, WorkAssignment
from src.attendance_ledger.attendance_ledger.core.enums import PaymentMethod, PaymentStatus
from src.attendance_ledger.attendance_ledger.core.exceptions import StaleReferenceError, ValidationError
from src.attendance_ledger.attendance_ledger.employees.model import PaymentStatusRecord


@pytest.fixture
def reports(container, store):
    store.add_employee(
        "An",
        start=date(2025, 1, 6),
        entries=(AttendanceEntry(work_date=date(2025, 3, 3), assignment=WorkAssignment.full_day(), hours=8, pay=1000),),
        payment_status=(PaymentStatusRecord("2025-03", PaymentStatus.PAID, PaymentMethod.CASH),),
    )
    store.add_employee("binh", start=date(2025, 2, 10))
    store.add_employee("Cuong", start=date(2025, 3, 15), department="Front")
    store.add_employee("Dung", start=date(2024, 12, 2), end_date=date(2025, 1, 31), department="Front")
    return container.payroll_report_service


def test_months_run_from_earliest_start(reports, horizon):
    assert reports.months(horizon=horizon) == ["2025-03", "2025-02", "2025-01", "2024-12"]


def test_month_summaries_cover_active_employees(reports, horizon):
    summaries = reports.month_summaries("2025-03", horizon=horizon)

    assert [s.employee_name for s in summaries] == ["An", "binh", "Cuong"]
    assert summaries[0].total_pay == 1000
    assert summaries[0].payment_status.status == PaymentStatus.PAID


def test_month_summaries_reject_bad_month(reports, horizon):
    with pytest.raises(ValidationError):
        reports.month_summaries("2025/03", horizon=horizon)


def test_employee_report_lists_active_months(reports, horizon):
    history = reports.employee_report("binh", horizon=horizon)
    assert [s.month for s in history] == ["2025-03", "2025-02"]

    with pytest.raises(StaleReferenceError):
        reports.employee_report("Nobody", horizon=horizon)


def test_payment_grid_groups_by_department_and_sorts_names(reports):
    groups = reports.payment_grid("2025-03")

    assert [(g.department, [r.employee_name for r in g.rows]) for g in groups] == [
        ("Kitchen", ["An", "binh"]),
        ("Front", ["Cuong"]),
    ]


def test_payment_grid_tabs(reports):
    paid = reports.payment_grid("2025-03", tab="paid")
    assert [r.employee_name for g in paid for r in g.rows] == ["An"]

    assert reports.payment_grid("2025-03", tab="paid", paid_method="bank") == []

    unpaid = reports.payment_grid("2025-03", tab="unpaid")
    assert [r.employee_name for g in unpaid for r in g.rows] == ["binh", "Cuong"]


def test_payment_grid_rejects_unknown_tab(reports):
    with pytest.raises(ValidationError):
        reports.payment_grid("2025-03", tab="overdue")


def test_payment_grid_matches_tracker_and_summaries(reports, container, horizon):
    tracked = set(container.payment_tracker.start("salary-2025-03", horizon=horizon))
    grid = {r.employee_name for g in reports.payment_grid("2025-03") for r in g.rows}
    summarized = {s.employee_name for s in reports.month_summaries("2025-03", horizon=horizon)}

    assert tracked == grid == summarized == {"An", "binh", "Cuong"}
