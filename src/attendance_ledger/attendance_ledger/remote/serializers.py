"""Mapping between the store's JSON documents and domain objects."""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from ..attendance.model import AttendanceEntry, WorkAssignment
from ..common.datetime_utils import format_hhmm, parse_hhmm, parse_iso_date
from ..core.enums import PaymentMethod, PaymentStatus, WorkType
from ..core.exceptions import BackendError, ValidationError
from ..departments.model import Department
from ..employees.model import Employee, PaymentStatusRecord
from ..history.model import HistoryPoint

_LEGACY_HOURS_PREFIX = "HOURS_"

T = TypeVar("T")


def _document(what: str) -> Callable[[Callable[[Any], T]], Callable[[Any], T]]:
    """Malformed store documents surface as BackendError."""

    def decorate(fn: Callable[[Any], T]) -> Callable[[Any], T]:
        @wraps(fn)
        def wrapper(d: Any) -> T:
            try:
                return fn(d)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise BackendError(f"Unreadable {what} from server: {e}") from e

        return wrapper

    return decorate


def _date_or_none(value: Any) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(str(value)[:10])


def _float(value: Any) -> float:
    if value in (None, ""):
        return 0.0
    return float(value)


def assignment_from_json(d: dict) -> WorkAssignment:
    raw = str(d.get("workType") or "")
    try:
        # Older records encode the payload in the type string itself.
        if raw.startswith(_LEGACY_HOURS_PREFIX):
            return WorkAssignment.custom_hours(float(raw[len(_LEGACY_HOURS_PREFIX):]))
        if "-" in raw:
            start, end = raw.split("-", 1)
            return WorkAssignment(WorkType.CUSTOM, start_time=parse_hhmm(start), end_time=parse_hhmm(end))

        work_type = WorkType(raw)
        if work_type == WorkType.CUSTOM:
            return WorkAssignment(
                work_type,
                start_time=parse_hhmm(d.get("startTime")),
                end_time=parse_hhmm(d.get("endTime")),
            )
        if work_type == WorkType.CUSTOM_HOURS:
            return WorkAssignment.custom_hours(_float(d.get("hours")))
        return WorkAssignment(work_type)
    except (ValueError, ValidationError) as e:
        raise BackendError(f"Unreadable work type from server: {raw!r}") from e


def assignment_to_json(assignment: WorkAssignment) -> dict:
    is_custom = assignment.work_type == WorkType.CUSTOM
    is_custom_hours = assignment.work_type == WorkType.CUSTOM_HOURS
    return {
        "workType": assignment.work_type.value,
        "startTime": format_hhmm(assignment.start_time) if is_custom else "",
        "endTime": format_hhmm(assignment.end_time) if is_custom else "",
        "hours": float(assignment.hours or 0) if is_custom_hours else 0,
    }


@_document("attendance entry")
def entry_from_json(d: dict) -> AttendanceEntry:
    return AttendanceEntry(
        work_date=parse_iso_date(str(d["date"])[:10]),
        assignment=assignment_from_json(d),
        hours=_float(d.get("hours")),
        pay=_float(d.get("pay")),
    )


@_document("payment status")
def payment_status_from_json(d: dict) -> PaymentStatusRecord:
    method = d.get("method") or None
    return PaymentStatusRecord(
        month=str(d["month"]),
        status=PaymentStatus(d.get("status") or PaymentStatus.UNPAID.value),
        method=PaymentMethod(method) if method else None,
    )


@_document("employee")
def employee_from_json(d: dict) -> Employee:
    return Employee(
        name=str(d["name"]),
        base_salary=_float(d.get("baseSalary")),
        start_date=parse_iso_date(str(d["startDate"])[:10]),
        end_date=_date_or_none(d.get("endDate")),
        department=str(d.get("department") or ""),
        salary_history=tuple(
            HistoryPoint(value=_float(h.get("salary")), effective_date=parse_iso_date(str(h["effectiveDate"])[:10]))
            for h in d.get("salaryHistory") or []
        ),
        entries=tuple(entry_from_json(e) for e in d.get("entries") or []),
        payment_status=tuple(payment_status_from_json(p) for p in d.get("paymentStatus") or []),
    )


@_document("department")
def department_from_json(d: dict) -> Department:
    return Department(
        name=str(d["name"]),
        hours=_float(d.get("hours")),
        hours_history=tuple(
            HistoryPoint(value=_float(h.get("hours")), effective_date=parse_iso_date(str(h["effectiveDate"])[:10]))
            for h in d.get("hoursHistory") or []
        ),
    )


@_document("holiday")
def holiday_date_from_json(d: dict) -> date:
    return parse_iso_date(str(d["date"])[:10])
