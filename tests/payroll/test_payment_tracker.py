from __future__ import annotations

from datetime import date

import pytest

from src.attendance_ledger.attendance_ledger.core.enums import EditMode, PaymentMethod, PaymentStatus
from src.attendance_ledger.attendance_ledger.core.exceptions import ValidationError
from src.attendance_ledger.attendance_ledger.payroll.payment_tracker import (
    PaymentCell,
    parse_salary_table_id,
    salary_table_id,
)

MARCH = salary_table_id("2025-03")


@pytest.fixture
def tracker(container, store):
    store.add_employee("An", start=date(2025, 1, 6))
    store.add_employee("Binh", start=date(2025, 3, 15), department="Front")
    store.add_employee("Chi", start=date(2024, 6, 1), end_date=date(2025, 1, 31))
    return container.payment_tracker


def test_salary_table_id_format():
    assert MARCH == "salary-2025-03"
    assert parse_salary_table_id(MARCH) == "2025-03"
    with pytest.raises(ValidationError):
        parse_salary_table_id("table-2025-03-Kitchen")


def test_start_covers_employees_active_in_month(tracker, horizon):
    cells = tracker.start(MARCH, horizon=horizon)
    assert cells == {"An": PaymentCell(), "Binh": PaymentCell()}


def test_marking_paid_defaults_method_to_bank(tracker, horizon):
    tracker.start(MARCH, horizon=horizon)

    assert tracker.mutate(MARCH, "An", {"status": "paid"}) == PaymentCell("paid", "bank")
    assert tracker.mutate(MARCH, "An", {"method": "cash"}) == PaymentCell("paid", "cash")
    assert tracker.mutate(MARCH, "An", {"status": "unpaid"}) == PaymentCell("unpaid", "")
    assert tracker.mutate(MARCH, "An", {"status": "paid", "method": "cash"}) == PaymentCell("paid", "cash")


def test_save_commits_valid_and_reports_invalid(tracker, store, horizon):
    tracker.start(MARCH, horizon=horizon)
    tracker.mutate(MARCH, "An", {"status": "paid", "method": "cash"})
    tracker.mutate(MARCH, "Binh", {"status": "refunded"})

    report = tracker.save(MARCH, horizon=horizon)

    assert report.committed == ("An",)
    assert [(e.key, e.kind) for e in report.errors] == [("Binh", "validation")]
    assert ("update_payment_status", "An", "2025-03", PaymentStatus.PAID, PaymentMethod.CASH) in store.employees.calls
    assert store.employees.items["An"].payment_status_for("2025-03").method == PaymentMethod.CASH
    assert tracker.mode(MARCH) == EditMode.VIEW


def test_paid_with_unknown_method_is_rejected(tracker, horizon):
    tracker.start(MARCH, horizon=horizon)
    tracker.mutate(MARCH, "An", {"status": "paid", "method": "cheque"})

    report = tracker.save(MARCH, horizon=horizon)

    assert [e.key for e in report.errors] == ["An"]
    assert "payment method" in report.errors[0].message


def test_unpaid_is_sent_without_method(tracker, store, horizon):
    tracker.start(MARCH, horizon=horizon)
    tracker.save(MARCH, horizon=horizon)

    sent = [c for c in store.employees.calls if c[0] == "update_payment_status"]
    assert {c[4] for c in sent} == {None}


def test_store_conflict_is_reported_per_employee(tracker, store, horizon):
    store.employees.reject_payment_for.add("An")
    tracker.start(MARCH, horizon=horizon)

    report = tracker.save(MARCH, horizon=horizon)

    assert report.committed == ("Binh",)
    assert [(e.key, e.kind) for e in report.errors] == [("An", "conflict")]


def test_employee_gone_since_start_is_stale(tracker, store, container, horizon):
    tracker.start(MARCH, horizon=horizon)
    del store.employees.items["Binh"]
    container.session.refresh()

    report = tracker.save(MARCH, horizon=horizon)

    assert [(e.key, e.kind) for e in report.errors] == [("Binh", "stale_reference")]


def test_cancel_leaves_no_trace(tracker, store, horizon):
    tracker.start(MARCH, horizon=horizon)
    tracker.mutate(MARCH, "An", {"status": "paid"})

    tracker.cancel(MARCH)

    assert tracker.mode(MARCH) == EditMode.VIEW
    assert store.employees.calls == []
