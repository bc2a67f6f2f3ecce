from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.validators import require_not_future, require_range
from ..core.constants import MAX_DEPARTMENT_HOURS, MIN_DEPARTMENT_HOURS
from ..core.exceptions import ValidationError
from ..history.model import HistoryPoint
from ..history.resolver import ensure_new_effective_date, sorted_history
from ..snapshot import SnapshotSession
from .model import Department
from .repository import DepartmentRepository


@dataclass(frozen=True)
class DepartmentHoursRow:
    name: str
    current_hours: float
    history: list[HistoryPoint]


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, session: SnapshotSession):
        self._departments = departments
        self._session = session

    def update_hours(
        self,
        *,
        name: Optional[str],
        hours: Optional[float],
        horizon: date,
        effective_date: Optional[date] = None,
    ) -> Department:
        if not name:
            raise ValidationError("Please select a department.")
        dept = self._session.snapshot.department(name)
        if dept is None:
            raise ValidationError(f'Department "{name}" does not exist.')
        hours = require_range(hours, "Daily hours", MIN_DEPARTMENT_HOURS, MAX_DEPARTMENT_HOURS)
        effective_date = require_not_future(effective_date or horizon, "Effective date", horizon)
        if dept.hours == hours:
            raise ValidationError("New hours must be different from current hours.")
        ensure_new_effective_date(dept.hours_history, effective_date)

        updated = self._departments.update_hours(name=dept.name, hours=hours, effective_date=effective_date)
        self._session.refresh()
        return updated

    def hours_history_rows(self) -> list[DepartmentHoursRow]:
        return [
            DepartmentHoursRow(name=d.name, current_hours=d.hours, history=sorted_history(d.hours_history))
            for d in self._session.snapshot.departments
        ]
