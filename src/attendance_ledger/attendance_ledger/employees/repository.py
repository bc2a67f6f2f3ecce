from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentMethod, PaymentStatus
from .model import Employee


class EmployeeRepository(Protocol):
    """Employee store interface.

    Note (DIP): services depend on this interface, not on the HTTP store.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(self, *, name: str, base_salary: float, start_date: date, department: str) -> Employee:
        raise NotImplementedError

    def update_department(self, *, name: str, department: str) -> Employee:
        raise NotImplementedError

    def set_end_date(self, *, name: str, end_date: date) -> Employee:
        raise NotImplementedError

    def update_salary(self, *, name: str, salary: float, effective_date: date) -> Employee:
        """Append a point to the employee's salary history."""

        raise NotImplementedError

    def update_payment_status(
        self,
        *,
        name: str,
        month: str,
        status: PaymentStatus,
        method: Optional[PaymentMethod] = None,
    ) -> Optional[Employee]:
        """None when the store answers without a body."""

        raise NotImplementedError
