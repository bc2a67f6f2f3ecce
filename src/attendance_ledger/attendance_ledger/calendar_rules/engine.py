from __future__ import annotations

from datetime import date
from typing import AbstractSet, Iterable, Optional

from ..attendance.model import HOLIDAY, INACTIVE, UNSET, AttendanceEntry, WorkAssignment, WorkStatus
from ..core.constants import DEFAULT_REGULAR_WEEKDAYS
from ..core.enums import StatusKind
from ..employees.model import Employee

_EXPECTED_FULL_DAY = WorkStatus(StatusKind.EXPECTED, WorkAssignment.full_day())


class CalendarRuleEngine:
    """Classifies dates for an employee.

    Pure over its inputs: the holiday set, the regular weekdays and the
    evaluation horizon are fixed at construction.
    """

    def __init__(
        self,
        holidays: Iterable[date],
        *,
        horizon: date,
        regular_weekdays: Optional[AbstractSet[int]] = None,
    ):
        self._holidays = frozenset(holidays)
        self._horizon = horizon
        self._regular_weekdays = frozenset(
            DEFAULT_REGULAR_WEEKDAYS if regular_weekdays is None else regular_weekdays
        )

    @property
    def horizon(self) -> date:
        return self._horizon

    def is_holiday(self, day: date) -> bool:
        return day in self._holidays

    def is_regular_weekday(self, day: date) -> bool:
        return day.weekday() in self._regular_weekdays

    def is_working_day(self, day: date, employee: Employee) -> bool:
        return (
            self.is_regular_weekday(day)
            and not self.is_holiday(day)
            and employee.is_active_on(day)
            and day <= self._horizon
        )

    def derive_status(self, day: date, employee: Employee, entry: Optional[AttendanceEntry] = None) -> WorkStatus:
        """Status of one cell; ``entry`` defaults to the employee's persisted entry for ``day``."""
        if self.is_holiday(day):
            return HOLIDAY
        if not employee.is_active_on(day):
            return INACTIVE

        entry = entry or employee.entry_for(day)
        if entry:
            return WorkStatus(StatusKind.RECORDED, entry.assignment)
        if self.is_working_day(day, employee):
            return _EXPECTED_FULL_DAY
        return UNSET
