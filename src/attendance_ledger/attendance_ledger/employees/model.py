from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import month_bounds, month_key
from ..core.enums import PaymentMethod, PaymentStatus
from ..history.model import HistoryPoint


@dataclass(frozen=True)
class PaymentStatusRecord:
    month: str
    status: PaymentStatus = PaymentStatus.UNPAID
    method: Optional[PaymentMethod] = None


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee as returned by the store.

    ``department`` is the current department only; salary changes are kept
    in ``salary_history``.
    """

    name: str
    base_salary: float
    start_date: date
    department: str
    end_date: Optional[date] = None
    salary_history: tuple[HistoryPoint, ...] = ()
    entries: tuple[AttendanceEntry, ...] = ()
    payment_status: tuple[PaymentStatusRecord, ...] = ()

    @property
    def is_inactive(self) -> bool:
        return self.end_date is not None

    def is_active_on(self, day: date) -> bool:
        if day < self.start_date:
            return False
        return self.end_date is None or day <= self.end_date

    def is_active_in_month(self, month: str) -> bool:
        first, last = month_bounds(month)
        return self.start_date <= last and (self.end_date is None or self.end_date >= first)

    def entry_for(self, day: date) -> Optional[AttendanceEntry]:
        for entry in self.entries:
            if entry.work_date == day:
                return entry
        return None

    def entries_in_month(self, month: str) -> list[AttendanceEntry]:
        return [e for e in self.entries if month_key(e.work_date) == month]

    def payment_status_for(self, month: str) -> PaymentStatusRecord:
        for record in self.payment_status:
            if record.month == month:
                return record
        return PaymentStatusRecord(month=month)
