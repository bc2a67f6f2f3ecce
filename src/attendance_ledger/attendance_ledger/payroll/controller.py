from __future__ import annotations

from flask import Flask, request

from ..common.http import ok, request_horizon
from ..container import Container
from ..core.exceptions import ValidationError
from .aggregator import MonthSummary
from .payment_tracker import PaymentCell, salary_table_id


def summary_json(s: MonthSummary) -> dict:
    ps = s.payment_status
    return {
        "employee": s.employee_name,
        "month": s.month,
        "total_hours": s.total_hours,
        "total_pay": s.total_pay,
        "expected_hours": s.expected_hours,
        "expected_pay": s.expected_pay,
        "variance": s.variance,
        "payment_status": {"status": ps.status.value, "method": ps.method.value if ps.method else None},
    }


def payment_cell_json(cell: PaymentCell) -> dict:
    return {"status": cell.status, "method": cell.method or None}


def register(app: Flask, container: Container) -> None:
    reports = container.payroll_report_service
    tracker = container.payment_tracker

    @app.route("/api/payroll/months", methods=["GET"], endpoint="payroll_months")
    def payroll_months():
        return ok(reports.months(horizon=request_horizon()))

    @app.route("/api/payroll/<month>", methods=["GET"], endpoint="payroll_month")
    def payroll_month(month: str):
        return ok([summary_json(s) for s in reports.month_summaries(month, horizon=request_horizon())])

    @app.route("/api/payroll/employees/<name>", methods=["GET"], endpoint="payroll_employee")
    def payroll_employee(name: str):
        return ok([summary_json(s) for s in reports.employee_report(name, horizon=request_horizon())])

    @app.route("/api/salary/<month>", methods=["GET"], endpoint="salary_grid")
    def salary_grid(month: str):
        table_id = salary_table_id(month)
        groups = reports.payment_grid(
            month,
            tab=request.args.get("tab", "all"),
            paid_method=request.args.get("method", "all"),
        )
        pending = tracker.buffer(table_id) if tracker.is_editing(table_id) else {}
        return ok(
            {
                "table_id": table_id,
                "mode": tracker.mode(table_id).value,
                "departments": [
                    {
                        "department": g.department,
                        "rows": [
                            {
                                "employee": r.employee_name,
                                "total_pay": r.total_pay,
                                "status": r.status.value,
                                "method": r.method.value if r.method else None,
                                "pending": payment_cell_json(pending[r.employee_name])
                                if r.employee_name in pending
                                else None,
                            }
                            for r in g.rows
                        ],
                    }
                    for g in groups
                ],
            }
        )

    @app.route("/api/salary/<month>/edit", methods=["POST"], endpoint="salary_edit_start")
    def salary_edit_start(month: str):
        table_id = salary_table_id(month)
        cells = tracker.start(table_id, horizon=request_horizon())
        return ok({"table_id": table_id, "mode": tracker.mode(table_id).value, "cells": len(cells)})

    @app.route("/api/salary/<month>/cells", methods=["PATCH"], endpoint="salary_edit_cell")
    def salary_edit_cell(month: str):
        data = request.get_json(silent=True) or {}
        employee = (data.pop("employee", "") or "").strip()
        if not employee:
            raise ValidationError("employee is required.")
        cell = tracker.mutate(salary_table_id(month), employee, data)
        return ok(payment_cell_json(cell))

    @app.route("/api/salary/<month>/save", methods=["POST"], endpoint="salary_edit_save")
    def salary_edit_save(month: str):
        report = tracker.save(salary_table_id(month), horizon=request_horizon())
        return ok(
            {
                "table_id": report.table_id,
                "committed": list(report.committed),
                "errors": [{"employee": e.key, "kind": e.kind, "message": e.message} for e in report.errors],
            }
        )

    @app.route("/api/salary/<month>/cancel", methods=["POST"], endpoint="salary_edit_cancel")
    def salary_edit_cancel(month: str):
        table_id = salary_table_id(month)
        tracker.cancel(table_id)
        return ok({"table_id": table_id, "mode": tracker.mode(table_id).value})
