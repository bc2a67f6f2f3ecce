from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..employees.model import Employee
from .model import WorkAssignment


class EntryRepository(Protocol):
    def save_entry(self, *, employee_name: str, work_date: date, assignment: WorkAssignment) -> Optional[Employee]:
        """Create or update the entry for (employee, date); the store computes hours and pay.

        Returns the updated employee, or None when the store answers without a body.
        """

        raise NotImplementedError

    def create_mass_entries(self, *, department: str, work_date: date, hours: float) -> Sequence[Employee]:
        """Record the same hours for every employee of a department on one date."""

        raise NotImplementedError
