from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PaymentMethod, PaymentStatus
from ..remote.client import ApiClient, path_segment
from ..remote.serializers import employee_from_json
from .model import Employee
from .repository import EmployeeRepository


class HttpEmployeeRepository(EmployeeRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Employee]:
        return [employee_from_json(d) for d in self._client.get("/api/employees") or []]

    def create(self, *, name: str, base_salary: float, start_date: date, department: str) -> Employee:
        data = self._client.post(
            "/api/employees",
            {
                "name": name,
                "baseSalary": base_salary,
                "startDate": start_date.isoformat(),
                "department": department,
            },
        )
        return employee_from_json(data)

    def update_department(self, *, name: str, department: str) -> Employee:
        data = self._client.put(f"/api/employees/{path_segment(name)}/department", {"department": department})
        return employee_from_json(data)

    def set_end_date(self, *, name: str, end_date: date) -> Employee:
        data = self._client.put(f"/api/employees/{path_segment(name)}/inactive", {"endDate": end_date.isoformat()})
        return employee_from_json(data)

    def update_salary(self, *, name: str, salary: float, effective_date: date) -> Employee:
        data = self._client.put(
            f"/api/employees/{path_segment(name)}/salary",
            {"salary": salary, "effectiveDate": effective_date.isoformat()},
        )
        return employee_from_json(data)

    def update_payment_status(
        self,
        *,
        name: str,
        month: str,
        status: PaymentStatus,
        method: Optional[PaymentMethod] = None,
    ) -> Optional[Employee]:
        payload = {"status": status.value}
        if status == PaymentStatus.PAID and method:
            payload["method"] = method.value
        data = self._client.put(f"/api/employees/{path_segment(name)}/payment/{month}", payload)
        return employee_from_json(data) if data else None
