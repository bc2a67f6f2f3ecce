from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_optional_date
from ..common.http import ok, request_horizon
from ..common.validators import optional_float
from ..container import Container
from ..departments.model import Department
from ..history.model import HistoryPoint
from ..history.resolver import current_value
from .model import Employee


def history_json(points: list[HistoryPoint]) -> list[dict]:
    return [{"value": p.value, "effective_date": p.effective_date.isoformat()} for p in points]


def employee_json(emp: Employee, horizon: date) -> dict:
    return {
        "name": emp.name,
        "department": emp.department,
        "base_salary": emp.base_salary,
        "current_salary": current_value(emp.salary_history, emp.base_salary, horizon),
        "start_date": emp.start_date.isoformat(),
        "end_date": emp.end_date.isoformat() if emp.end_date else None,
        "inactive": emp.is_inactive,
    }


def department_json(dept: Department) -> dict:
    return {"name": dept.name, "hours": dept.hours}


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service
    departments = container.department_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        horizon = request_horizon()
        return ok([employee_json(emp, horizon) for emp in container.session.snapshot.employees])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_add")
    def employees_add():
        data = request.get_json(silent=True) or {}
        horizon = request_horizon()
        emp = employees.add_employee(
            name=data.get("name") or "",
            base_salary=optional_float(data.get("base_salary")),
            start_date=parse_optional_date(data.get("start_date")),
            department=data.get("department"),
            horizon=horizon,
        )
        return ok(employee_json(emp, horizon), status=201)

    @app.route("/api/employees/<name>/department", methods=["PUT"], endpoint="employees_transfer")
    def employees_transfer(name: str):
        data = request.get_json(silent=True) or {}
        emp = employees.transfer_department(name=name, department=data.get("department"))
        return ok(employee_json(emp, request_horizon()))

    @app.route("/api/employees/<name>/inactive", methods=["PUT"], endpoint="employees_inactive")
    def employees_inactive(name: str):
        data = request.get_json(silent=True) or {}
        horizon = request_horizon()
        emp = employees.mark_inactive(name=name, end_date=parse_optional_date(data.get("end_date")), horizon=horizon)
        return ok(employee_json(emp, horizon))

    @app.route("/api/employees/<name>/salary", methods=["PUT"], endpoint="employees_salary")
    def employees_salary(name: str):
        data = request.get_json(silent=True) or {}
        horizon = request_horizon()
        emp = employees.update_salary(
            name=name,
            salary=optional_float(data.get("salary")),
            effective_date=parse_optional_date(data.get("effective_date")),
            horizon=horizon,
        )
        return ok(employee_json(emp, horizon))

    @app.route("/api/employees/<name>/salary-history", methods=["GET"], endpoint="employees_salary_history")
    def employees_salary_history(name: str):
        return ok(history_json(employees.salary_history(name)))

    @app.route("/api/departments", methods=["GET"], endpoint="departments_list")
    def departments_list():
        return ok(
            [
                {"name": row.name, "hours": row.current_hours, "history": history_json(row.history)}
                for row in departments.hours_history_rows()
            ]
        )

    @app.route("/api/departments/<name>/hours", methods=["PUT"], endpoint="departments_hours")
    def departments_hours(name: str):
        data = request.get_json(silent=True) or {}
        dept = departments.update_hours(
            name=name,
            hours=optional_float(data.get("hours")),
            effective_date=parse_optional_date(data.get("effective_date")),
            horizon=request_horizon(),
        )
        return ok(department_json(dept))

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        return ok(sorted(day.isoformat() for day in container.session.snapshot.holidays))
