from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Optional

from ..calendar_rules.engine import CalendarRuleEngine
from ..common.datetime_utils import iter_days, month_bounds, month_key, next_month
from ..core.exceptions import DomainError
from ..editing.overlay import CommitError
from ..employees.model import Employee
from ..snapshot import Snapshot
from .model import WorkAssignment
from .repository import EntryRepository

logger = logging.getLogger("attendance_ledger.backfill")


@dataclass(frozen=True)
class BackfillRequest:
    employee_name: str
    work_date: date


@dataclass
class BackfillReport:
    requested: list[BackfillRequest] = field(default_factory=list)
    created: list[BackfillRequest] = field(default_factory=list)
    failures: list[CommitError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class AttendanceBackfillScheduler:
    """Creates FULL_DAY placeholders for working days that have no entry.

    Best effort: each creation is independent, a failure is logged and
    reported and the pass moves on.
    """

    def __init__(self, entries: EntryRepository, *, regular_weekdays: Optional[AbstractSet[int]] = None):
        self._entries = entries
        self._regular_weekdays = regular_weekdays

    def plan(self, snapshot: Snapshot, *, horizon: date) -> list[BackfillRequest]:
        engine = CalendarRuleEngine(snapshot.holidays, horizon=horizon, regular_weekdays=self._regular_weekdays)
        requests: list[BackfillRequest] = []
        for emp in snapshot.employees:
            requests.extend(self._plan_employee(emp, engine, horizon))
        return requests

    def _plan_employee(self, emp: Employee, engine: CalendarRuleEngine, horizon: date) -> list[BackfillRequest]:
        last_day = min(emp.end_date, horizon) if emp.end_date else horizon
        covered = {e.work_date for e in emp.entries}
        out: list[BackfillRequest] = []

        # Month by month, from the start month through last_day.
        current = emp.start_date.replace(day=1)
        while current <= last_day:
            first, month_end = month_bounds(month_key(current))
            for day in iter_days(first, min(month_end, last_day)):
                if day in covered or not engine.is_working_day(day, emp):
                    continue
                out.append(BackfillRequest(employee_name=emp.name, work_date=day))
            current = next_month(current)
        return out

    def run(self, snapshot: Snapshot, *, horizon: date) -> BackfillReport:
        report = BackfillReport(requested=self.plan(snapshot, horizon=horizon))
        placeholder = WorkAssignment.full_day()

        for req in report.requested:
            try:
                self._entries.save_entry(
                    employee_name=req.employee_name,
                    work_date=req.work_date,
                    assignment=placeholder,
                )
            except DomainError as e:
                logger.warning(
                    "default entry not created",
                    extra={"employee": req.employee_name, "work_date": req.work_date.isoformat(), "error": str(e)},
                )
                report.failures.append(
                    CommitError(key=(req.employee_name, req.work_date), kind=e.kind, message=str(e))
                )
            else:
                report.created.append(req)

        if report.requested:
            logger.info(
                "backfill pass finished",
                extra={
                    "requested": len(report.requested),
                    "created": len(report.created),
                    "failed": len(report.failures),
                },
            )
        return report
