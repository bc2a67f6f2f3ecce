from __future__ import annotations

from datetime import date
from typing import Sequence

from ..remote.client import ApiClient, path_segment
from ..remote.serializers import department_from_json
from .model import Department
from .repository import DepartmentRepository


class HttpDepartmentRepository(DepartmentRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[Department]:
        return [department_from_json(d) for d in self._client.get("/api/departments") or []]

    def update_hours(self, *, name: str, hours: float, effective_date: date) -> Department:
        data = self._client.put(
            f"/api/departments/{path_segment(name)}/hours",
            {"hours": hours, "effectiveDate": effective_date.isoformat()},
        )
        return department_from_json(data)
