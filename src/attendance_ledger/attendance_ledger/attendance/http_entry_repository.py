from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..employees.model import Employee
from ..remote.client import ApiClient
from ..remote.serializers import assignment_to_json, employee_from_json
from .model import WorkAssignment
from .repository import EntryRepository


class HttpEntryRepository(EntryRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def save_entry(self, *, employee_name: str, work_date: date, assignment: WorkAssignment) -> Optional[Employee]:
        payload = {"empName": employee_name, "date": work_date.isoformat(), **assignment_to_json(assignment)}
        data = self._client.post("/api/entries", payload)
        return employee_from_json(data) if data else None

    def create_mass_entries(self, *, department: str, work_date: date, hours: float) -> Sequence[Employee]:
        data = self._client.post(
            "/api/entries/mass",
            {"department": department, "date": work_date.isoformat(), "hours": hours},
        )
        return [employee_from_json(d) for d in data or []]
