from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM into time; empty input means 'not set'."""
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)")


def format_hhmm(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else ""


def now_local() -> datetime:
    """Current local time.

    Note: Only ``common.http.request_horizon`` and scripts call this; everything
    below them takes the evaluation horizon as an argument.
    """
    return datetime.now()


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def parse_month(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    if not value or not _MONTH_RE.match(value):
        raise ValidationError(f"Invalid month format: {value!r}. Expected YYYY-MM.")
    year, month = int(value[:4]), int(value[5:7])
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {value!r}")
    return date(year, month, 1)


def month_bounds(month: str) -> tuple[date, date]:
    first = parse_month(month)
    days_in_month = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=days_in_month)


def next_month(first_day: date) -> date:
    if first_day.month == 12:
        return date(first_day.year + 1, 1, 1)
    return date(first_day.year, first_day.month + 1, 1)


def iter_months(start: date, end: date) -> Iterator[str]:
    """Yield YYYY-MM keys from start's month through end's month, inclusive."""
    current = start.replace(day=1)
    while current <= end:
        yield month_key(current)
        current = next_month(current)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
