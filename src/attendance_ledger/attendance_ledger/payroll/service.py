from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, Optional

from ..common.datetime_utils import parse_month
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import StaleReferenceError, ValidationError
from ..employees.model import Employee
from ..snapshot import Snapshot, SnapshotSession
from .aggregator import MonthlyAggregator, MonthSummary, covered_months

PAYMENT_TABS = ("all", "paid", "unpaid")


@dataclass(frozen=True)
class PaymentGridRow:
    employee_name: str
    total_pay: float
    status: PaymentStatus
    method: Optional[PaymentMethod]


@dataclass(frozen=True)
class PaymentGridGroup:
    department: str
    rows: list[PaymentGridRow]


class PayrollReportService:
    def __init__(self, session: SnapshotSession, *, regular_weekdays: Optional[AbstractSet[int]] = None):
        self._session = session
        self._regular_weekdays = regular_weekdays

    def _aggregator(self, snapshot: Snapshot, horizon: date) -> MonthlyAggregator:
        return MonthlyAggregator(snapshot.holidays, horizon=horizon, regular_weekdays=self._regular_weekdays)

    def months(self, *, horizon: date) -> list[str]:
        return covered_months(self._session.snapshot.employees, horizon)

    def month_summaries(self, month: str, *, horizon: date) -> list[MonthSummary]:
        parse_month(month)
        snapshot = self._session.snapshot
        agg = self._aggregator(snapshot, horizon)
        return [
            agg.compute_month_summary(emp, snapshot.department_of(emp), month)
            for emp in snapshot.employees_active_in_month(month)
        ]

    def employee_report(self, name: str, *, horizon: date) -> list[MonthSummary]:
        snapshot = self._session.snapshot
        emp = snapshot.employee(name)
        if emp is None:
            raise StaleReferenceError(f'Employee "{name}" not found.')
        agg = self._aggregator(snapshot, horizon)
        return agg.employee_history(emp, snapshot.department_of(emp), covered_months(snapshot.employees, horizon))

    def payment_grid(self, month: str, *, tab: str = "all", paid_method: str = "all") -> list[PaymentGridGroup]:
        """Salary table rows for employees active at any point in the month."""
        parse_month(month)
        if tab not in PAYMENT_TABS:
            raise ValidationError(f"Unknown tab: {tab!r}")
        if tab == "paid" and paid_method not in {m.value for m in PaymentMethod}:
            raise ValidationError(f"Unknown payment method: {paid_method!r}")

        snapshot = self._session.snapshot

        def visible(emp: Employee) -> bool:
            if not emp.is_active_in_month(month):
                return False
            ps = emp.payment_status_for(month)
            if tab == "paid":
                return ps.status == PaymentStatus.PAID and (
                    paid_method == PaymentMethod.ALL.value or (ps.method and ps.method.value == paid_method)
                )
            if tab == "unpaid":
                return ps.status == PaymentStatus.UNPAID
            return True

        groups: list[PaymentGridGroup] = []
        for dept in snapshot.departments:
            members = sorted(
                (emp for emp in snapshot.employees if emp.department == dept.name and visible(emp)),
                key=lambda emp: emp.name.lower(),
            )
            if not members:
                continue
            rows = []
            for emp in members:
                ps = emp.payment_status_for(month)
                rows.append(
                    PaymentGridRow(
                        employee_name=emp.name,
                        total_pay=sum(e.pay for e in emp.entries_in_month(month)),
                        status=ps.status,
                        method=ps.method,
                    )
                )
            groups.append(PaymentGridGroup(department=dept.name, rows=rows))
        return groups
