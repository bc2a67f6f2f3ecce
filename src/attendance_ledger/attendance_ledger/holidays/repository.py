from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence


class HolidayRepository(Protocol):
    def list_dates(self) -> Sequence[date]:
        raise NotImplementedError
