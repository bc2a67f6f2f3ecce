from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def update_hours(self, *, name: str, hours: float, effective_date: date) -> Department:
        """Set current hours and append a point to the hours history."""

        raise NotImplementedError
