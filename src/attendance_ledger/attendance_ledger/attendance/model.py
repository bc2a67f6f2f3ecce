from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import StatusKind, WorkType


@dataclass(frozen=True)
class WorkAssignment:
    """A work type with the payload that belongs to it.

    CUSTOM carries start/end times, CUSTOM_HOURS carries hours, the other
    types carry nothing.
    """

    work_type: WorkType
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    hours: Optional[float] = None

    @classmethod
    def full_day(cls) -> "WorkAssignment":
        return cls(WorkType.FULL_DAY)

    @classmethod
    def custom(cls, start_time: time, end_time: time) -> "WorkAssignment":
        return cls(WorkType.CUSTOM, start_time=start_time, end_time=end_time)

    @classmethod
    def custom_hours(cls, hours: float) -> "WorkAssignment":
        return cls(WorkType.CUSTOM_HOURS, hours=float(hours))


@dataclass(frozen=True)
class AttendanceEntry:
    """Persisted entry for (employee, date).

    ``hours`` and ``pay`` are computed by the store and are authoritative.
    """

    work_date: date
    assignment: WorkAssignment
    hours: float = 0.0
    pay: float = 0.0

    @property
    def work_type(self) -> WorkType:
        return self.assignment.work_type


@dataclass(frozen=True)
class WorkStatus:
    """Derived status of one grid cell."""

    kind: StatusKind
    assignment: Optional[WorkAssignment] = None

    @property
    def work_type(self) -> Optional[WorkType]:
        return self.assignment.work_type if self.assignment else None


HOLIDAY = WorkStatus(StatusKind.HOLIDAY)
INACTIVE = WorkStatus(StatusKind.INACTIVE)
UNSET = WorkStatus(StatusKind.UNSET)
