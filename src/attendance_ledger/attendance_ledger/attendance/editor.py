from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Mapping, Optional

from ..calendar_rules.engine import CalendarRuleEngine
from ..common.datetime_utils import iter_days, month_bounds, parse_hhmm, parse_month
from ..core.constants import MAX_ENTRY_HOURS, MIN_ENTRY_HOURS
from ..core.enums import EditMode, WorkType
from ..core.exceptions import StaleReferenceError, ValidationError
from ..editing.overlay import EditOverlayManager
from ..snapshot import Snapshot
from .model import WorkAssignment, WorkStatus
from .repository import EntryRepository

CellKey = tuple[str, date]

_TABLE_PREFIX = "table-"


def attendance_table_id(month: str, department: str) -> str:
    return f"{_TABLE_PREFIX}{month}-{department}"


def parse_attendance_table_id(table_id: str) -> tuple[str, str]:
    """Split ``table-YYYY-MM-<department>`` into (month, department)."""
    if not table_id.startswith(_TABLE_PREFIX) or len(table_id) < len(_TABLE_PREFIX) + 9:
        raise ValidationError(f"Invalid attendance table id: {table_id!r}")
    rest = table_id[len(_TABLE_PREFIX):]
    month, department = rest[:7], rest[8:]
    parse_month(month)
    if rest[7] != "-" or not department:
        raise ValidationError(f"Invalid attendance table id: {table_id!r}")
    return month, department


@dataclass(frozen=True)
class AttendanceCell:
    """Buffered value of one attendance cell; ``work_type=None`` is a blank cell."""

    work_type: Optional[WorkType] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    hours: Optional[float] = None

    @classmethod
    def from_status(cls, status: WorkStatus) -> "AttendanceCell":
        a = status.assignment
        if a is None:
            return cls()
        return cls(work_type=a.work_type, start_time=a.start_time, end_time=a.end_time, hours=a.hours)

    def to_assignment(self) -> WorkAssignment:
        if self.work_type is None:
            raise ValidationError("Work type is required.")
        return WorkAssignment(
            self.work_type,
            start_time=self.start_time if self.work_type == WorkType.CUSTOM else None,
            end_time=self.end_time if self.work_type == WorkType.CUSTOM else None,
            hours=self.hours if self.work_type == WorkType.CUSTOM_HOURS else None,
        )


def validate_assignment_payload(work_type: WorkType, start_time, end_time, hours) -> None:
    if work_type == WorkType.CUSTOM and (not start_time or not end_time):
        raise ValidationError("Start and end times are required for CUSTOM work type.")
    if work_type == WorkType.CUSTOM_HOURS and (hours is None or not MIN_ENTRY_HOURS <= hours <= MAX_ENTRY_HOURS):
        raise ValidationError("Hours must be between 0 and 24 for CUSTOM_HOURS work type.")


def _coerce_work_type(value: Any) -> Optional[WorkType]:
    if value in (None, ""):
        return None
    try:
        return WorkType(value)
    except ValueError:
        raise ValidationError(f"Unknown work type: {value!r}")


def _coerce_time(value: Any) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    return parse_hhmm(str(value))


def _coerce_hours(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid hours: {value!r}")


@dataclass(frozen=True)
class GridCell:
    employee_name: str
    work_date: date
    status: WorkStatus
    pending: Optional[AttendanceCell] = None


@dataclass(frozen=True)
class AttendanceTableView:
    table_id: str
    month: str
    department: str
    mode: EditMode
    employees: list[str]
    rows: list[tuple[date, list[GridCell]]]


class AttendanceTableEditor(EditOverlayManager[CellKey, AttendanceCell]):
    """Edit buffers for the per-month, per-department attendance grid."""

    def __init__(self, session, entries: EntryRepository, *, regular_weekdays=None):
        super().__init__(session)
        self._entries = entries
        self._regular_weekdays = regular_weekdays

    def _engine(self, snapshot: Snapshot, horizon: date) -> CalendarRuleEngine:
        return CalendarRuleEngine(snapshot.holidays, horizon=horizon, regular_weekdays=self._regular_weekdays)

    def view(self, table_id: str, *, horizon: date) -> AttendanceTableView:
        """Derived status of every cell, with the open buffer's value alongside when editing."""
        month, department = parse_attendance_table_id(table_id)
        snapshot = self._session.snapshot
        engine = self._engine(snapshot, horizon)
        roster = snapshot.department_roster(department, month)
        pending = self._buffers.get(table_id, {})

        first, last = month_bounds(month)
        rows = [
            (
                day,
                [
                    GridCell(
                        employee_name=emp.name,
                        work_date=day,
                        status=engine.derive_status(day, emp),
                        pending=pending.get((emp.name, day)),
                    )
                    for emp in roster
                ],
            )
            for day in iter_days(first, last)
        ]
        return AttendanceTableView(
            table_id=table_id,
            month=month,
            department=department,
            mode=self.mode(table_id),
            employees=[emp.name for emp in roster],
            rows=rows,
        )

    def editable_cells(self, snapshot: Snapshot, table_id: str, *, horizon: date) -> dict[CellKey, AttendanceCell]:
        month, department = parse_attendance_table_id(table_id)
        first, last = month_bounds(month)
        engine = self._engine(snapshot, horizon)

        cells: dict[CellKey, AttendanceCell] = {}
        for emp in snapshot.department_roster(department, month):
            for day in iter_days(first, last):
                if engine.is_holiday(day) or not emp.is_active_on(day):
                    continue
                cells[(emp.name, day)] = AttendanceCell.from_status(engine.derive_status(day, emp))
        return cells

    def merge(self, current: AttendanceCell, partial: Mapping[str, Any]) -> AttendanceCell:
        unknown = set(partial) - {"work_type", "start_time", "end_time", "hours"}
        if unknown:
            raise ValidationError(f"Unknown cell fields: {', '.join(sorted(unknown))}")

        work_type = _coerce_work_type(partial["work_type"]) if "work_type" in partial else current.work_type
        start_time = _coerce_time(partial["start_time"]) if "start_time" in partial else current.start_time
        end_time = _coerce_time(partial["end_time"]) if "end_time" in partial else current.end_time
        hours = _coerce_hours(partial["hours"]) if "hours" in partial else current.hours

        # Leaving a type drops the payload that belonged to it.
        if work_type != WorkType.CUSTOM:
            start_time = end_time = None
        if work_type != WorkType.CUSTOM_HOURS:
            hours = None
        return AttendanceCell(work_type=work_type, start_time=start_time, end_time=end_time, hours=hours)

    def should_commit(self, value: AttendanceCell) -> bool:
        return value.work_type is not None

    def validate(self, snapshot: Snapshot, table_id: str, key: CellKey, value: AttendanceCell, *, horizon: date) -> None:
        name, day = key
        emp = snapshot.employee(name)
        if emp is None:
            raise StaleReferenceError(f'Employee "{name}" not found. Please refresh and try again.')

        engine = self._engine(snapshot, horizon)
        if engine.is_holiday(day):
            raise ValidationError("Cannot update entries for holidays.")
        if day > horizon:
            raise ValidationError("Cannot update entries for future dates.")
        if not emp.is_active_on(day):
            raise ValidationError(f"{name} is not active on {day.isoformat()}.")
        validate_assignment_payload(value.work_type, value.start_time, value.end_time, value.hours)

    def commit(self, table_id: str, key: CellKey, value: AttendanceCell) -> None:
        name, day = key
        self._entries.save_entry(employee_name=name, work_date=day, assignment=value.to_assignment())
