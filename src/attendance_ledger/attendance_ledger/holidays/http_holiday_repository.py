from __future__ import annotations

from datetime import date
from typing import Sequence

from ..remote.client import ApiClient
from ..remote.serializers import holiday_date_from_json
from .repository import HolidayRepository


class HttpHolidayRepository(HolidayRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_dates(self) -> Sequence[date]:
        return [holiday_date_from_json(h) for h in self._client.get("/api/holidays") or []]
