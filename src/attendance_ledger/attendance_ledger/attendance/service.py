from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.validators import require_range
from ..core.constants import MAX_ENTRY_HOURS, MIN_ENTRY_HOURS
from ..core.enums import WorkType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..snapshot import SnapshotSession
from .backfill import AttendanceBackfillScheduler, BackfillReport
from .editor import validate_assignment_payload
from .model import WorkAssignment
from .repository import EntryRepository


class AttendanceService:
    def __init__(
        self,
        entries: EntryRepository,
        session: SnapshotSession,
        backfill: AttendanceBackfillScheduler,
    ):
        self._entries = entries
        self._session = session
        self._backfill = backfill

    def synchronize(self, *, horizon: date) -> BackfillReport:
        """Fetch, fill in missing working days, and fetch again if anything was requested."""
        snapshot = self._session.refresh()
        report = self._backfill.run(snapshot, horizon=horizon)
        if report.requested:
            self._session.refresh()
        return report

    def update_entry(
        self,
        *,
        employee_name: str,
        work_date: date,
        work_type: WorkType,
        horizon: date,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        hours: Optional[float] = None,
    ) -> Optional[Employee]:
        snapshot = self._session.snapshot
        if snapshot.employee(employee_name) is None:
            raise ValidationError(f'Employee "{employee_name}" not found.')
        if work_date in snapshot.holidays:
            raise ValidationError("Cannot update entries for holidays.")
        if work_date > horizon:
            raise ValidationError("Cannot update entries for future dates.")
        validate_assignment_payload(work_type, start_time, end_time, hours)

        assignment = WorkAssignment(
            work_type,
            start_time=start_time if work_type == WorkType.CUSTOM else None,
            end_time=end_time if work_type == WorkType.CUSTOM else None,
            hours=hours if work_type == WorkType.CUSTOM_HOURS else None,
        )
        updated = self._entries.save_entry(employee_name=employee_name, work_date=work_date, assignment=assignment)
        self._session.refresh()
        return updated

    def add_mass_entry(
        self,
        *,
        department: Optional[str],
        work_date: Optional[date],
        hours: Optional[float],
        horizon: date,
    ) -> Sequence[Employee]:
        if not department:
            raise ValidationError("Please select a department.")
        snapshot = self._session.snapshot
        if snapshot.department(department) is None:
            raise ValidationError(f'Department "{department}" does not exist.')
        if work_date is None:
            raise ValidationError("Please select a date.")
        if work_date > horizon:
            raise ValidationError("Date cannot be in the future.")
        if work_date in snapshot.holidays:
            raise ValidationError("Cannot set hours for a holiday.")
        hours = require_range(hours, "Hours", MIN_ENTRY_HOURS, MAX_ENTRY_HOURS)

        updated = self._entries.create_mass_entries(department=department, work_date=work_date, hours=hours)
        self._session.refresh()
        return updated
