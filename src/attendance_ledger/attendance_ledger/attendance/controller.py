from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import format_hhmm, parse_hhmm, parse_month, parse_optional_date
from ..common.http import ok, request_horizon
from ..common.validators import optional_float
from ..container import Container
from ..core.enums import WorkType
from ..core.exceptions import ValidationError
from ..editing.overlay import SaveReport
from .backfill import BackfillReport
from .editor import AttendanceCell, attendance_table_id
from .model import WorkAssignment, WorkStatus


def assignment_json(a: Optional[WorkAssignment]) -> Optional[dict]:
    if a is None:
        return None
    return {
        "work_type": a.work_type.value,
        "start_time": format_hhmm(a.start_time),
        "end_time": format_hhmm(a.end_time),
        "hours": a.hours,
    }


def status_json(s: WorkStatus) -> dict:
    return {"kind": s.kind.value, "assignment": assignment_json(s.assignment)}


def cell_json(c: Optional[AttendanceCell]) -> Optional[dict]:
    if c is None:
        return None
    return {
        "work_type": c.work_type.value if c.work_type else "",
        "start_time": format_hhmm(c.start_time),
        "end_time": format_hhmm(c.end_time),
        "hours": c.hours,
    }


def _cell_key_json(key) -> dict:
    name, day = key
    return {"employee": name, "date": day.isoformat()}


def save_report_json(report: SaveReport) -> dict:
    return {
        "table_id": report.table_id,
        "committed": [_cell_key_json(k) for k in report.committed],
        "errors": [
            {
                **_cell_key_json(e.key),
                "kind": e.kind,
                "message": e.message,
            }
            for e in report.errors
        ],
    }


def backfill_report_json(report: BackfillReport) -> dict:
    return {
        "requested": len(report.requested),
        "created": len(report.created),
        "errors": [
            {"employee": e.key[0], "date": e.key[1].isoformat(), "kind": e.kind, "message": e.message}
            for e in report.failures
        ],
    }


def register(app: Flask, container: Container) -> None:
    editor = container.attendance_editor

    @app.route("/api/attendance/sync", methods=["POST"], endpoint="attendance_sync")
    def attendance_sync():
        report = container.attendance_service.synchronize(horizon=request_horizon())
        return ok(backfill_report_json(report))

    @app.route("/api/attendance/<month>/departments", methods=["GET"], endpoint="attendance_departments")
    def attendance_departments(month: str):
        parse_month(month)
        return ok(container.session.snapshot.departments_with_employees(month))

    @app.route("/api/attendance/<month>/<department>", methods=["GET"], endpoint="attendance_table")
    def attendance_table(month: str, department: str):
        view = editor.view(attendance_table_id(month, department), horizon=request_horizon())
        return ok(
            {
                "table_id": view.table_id,
                "mode": view.mode.value,
                "employees": view.employees,
                "rows": [
                    {
                        "date": day.isoformat(),
                        "cells": [
                            {
                                "employee": c.employee_name,
                                "status": status_json(c.status),
                                "pending": cell_json(c.pending),
                            }
                            for c in cells
                        ],
                    }
                    for day, cells in view.rows
                ],
            }
        )

    @app.route("/api/attendance/<month>/<department>/edit", methods=["POST"], endpoint="attendance_edit_start")
    def attendance_edit_start(month: str, department: str):
        table_id = attendance_table_id(month, department)
        cells = editor.start(table_id, horizon=request_horizon())
        return ok({"table_id": table_id, "mode": editor.mode(table_id).value, "cells": len(cells)})

    @app.route("/api/attendance/<month>/<department>/cells", methods=["PATCH"], endpoint="attendance_edit_cell")
    def attendance_edit_cell(month: str, department: str):
        data = request.get_json(silent=True) or {}
        employee = (data.pop("employee", "") or "").strip()
        work_date = parse_optional_date(data.pop("date", None))
        if not employee or work_date is None:
            raise ValidationError("employee and date are required.")
        cell = editor.mutate(attendance_table_id(month, department), (employee, work_date), data)
        return ok(cell_json(cell))

    @app.route("/api/attendance/<month>/<department>/save", methods=["POST"], endpoint="attendance_edit_save")
    def attendance_edit_save(month: str, department: str):
        report = editor.save(attendance_table_id(month, department), horizon=request_horizon())
        return ok(save_report_json(report))

    @app.route("/api/attendance/<month>/<department>/cancel", methods=["POST"], endpoint="attendance_edit_cancel")
    def attendance_edit_cancel(month: str, department: str):
        table_id = attendance_table_id(month, department)
        editor.cancel(table_id)
        return ok({"table_id": table_id, "mode": editor.mode(table_id).value})

    @app.route("/api/entries", methods=["POST"], endpoint="entries_update")
    def entries_update():
        data = request.get_json(silent=True) or {}
        try:
            work_type = WorkType(data.get("work_type") or "")
        except ValueError:
            raise ValidationError("Please select a valid work type.")
        work_date = parse_optional_date(data.get("date"))
        if work_date is None:
            raise ValidationError("Please select a date.")

        container.attendance_service.update_entry(
            employee_name=(data.get("employee") or "").strip(),
            work_date=work_date,
            work_type=work_type,
            start_time=parse_hhmm(data.get("start_time")),
            end_time=parse_hhmm(data.get("end_time")),
            hours=optional_float(data.get("hours")),
            horizon=request_horizon(),
        )
        return ok({"employee": data.get("employee"), "date": work_date.isoformat()})

    @app.route("/api/entries/mass", methods=["POST"], endpoint="entries_mass")
    def entries_mass():
        data = request.get_json(silent=True) or {}
        updated = container.attendance_service.add_mass_entry(
            department=data.get("department"),
            work_date=parse_optional_date(data.get("date")),
            hours=optional_float(data.get("hours")),
            horizon=request_horizon(),
        )
        return ok({"updated": [emp.name for emp in updated]})
