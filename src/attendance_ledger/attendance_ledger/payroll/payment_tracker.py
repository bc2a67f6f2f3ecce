from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..common.datetime_utils import parse_month
from ..core.enums import PaymentMethod, PaymentStatus
from ..core.exceptions import StaleReferenceError, ValidationError
from ..editing.overlay import EditOverlayManager
from ..employees.repository import EmployeeRepository
from ..snapshot import Snapshot

_TABLE_PREFIX = "salary-"

_STATUSES = {s.value for s in PaymentStatus}
_METHODS = {m.value for m in PaymentMethod}


def salary_table_id(month: str) -> str:
    return f"{_TABLE_PREFIX}{month}"


def parse_salary_table_id(table_id: str) -> str:
    if not table_id.startswith(_TABLE_PREFIX):
        raise ValidationError(f"Invalid salary table id: {table_id!r}")
    month = table_id[len(_TABLE_PREFIX):]
    parse_month(month)
    return month


@dataclass(frozen=True)
class PaymentCell:
    """Buffered payment status; raw strings so bad input reaches validation."""

    status: str = PaymentStatus.UNPAID.value
    method: str = ""


class PaymentStatusTracker(EditOverlayManager[str, PaymentCell]):
    """Edit buffers for the monthly payment grid (``salary-<month>``), keyed by employee name."""

    def __init__(self, session, employees: EmployeeRepository):
        super().__init__(session)
        self._employees = employees

    def editable_cells(self, snapshot: Snapshot, table_id: str, *, horizon: date) -> dict[str, PaymentCell]:
        month = parse_salary_table_id(table_id)
        cells: dict[str, PaymentCell] = {}
        for emp in snapshot.employees_active_in_month(month):
            ps = emp.payment_status_for(month)
            cells[emp.name] = PaymentCell(status=ps.status.value, method=ps.method.value if ps.method else "")
        return cells

    def merge(self, current: PaymentCell, partial: Mapping[str, Any]) -> PaymentCell:
        unknown = set(partial) - {"status", "method"}
        if unknown:
            raise ValidationError(f"Unknown cell fields: {', '.join(sorted(unknown))}")

        status = str(partial.get("status", current.status) or "")
        method = str(partial.get("method", current.method) or "")
        if "status" in partial and status != current.status:
            if status == PaymentStatus.PAID.value:
                method = method or PaymentMethod.BANK.value
            else:
                method = ""
        return PaymentCell(status=status, method=method)

    def validate(self, snapshot: Snapshot, table_id: str, key: str, value: PaymentCell, *, horizon: date) -> None:
        parse_salary_table_id(table_id)
        if snapshot.employee(key) is None:
            raise StaleReferenceError(f'Employee "{key}" not found. Please refresh the page and try again.')
        if value.status not in _STATUSES:
            raise ValidationError(f"Invalid payment status for {key}.")
        if value.status == PaymentStatus.PAID.value and value.method not in _METHODS:
            raise ValidationError(f"Invalid payment method for {key}. Please select a valid payment method.")

    def commit(self, table_id: str, key: str, value: PaymentCell) -> None:
        status = PaymentStatus(value.status)
        method = PaymentMethod(value.method) if status == PaymentStatus.PAID else None
        self._employees.update_payment_status(
            name=key,
            month=parse_salary_table_id(table_id),
            status=status,
            method=method,
        )
