"""Resolution of effective-dated values.

A history is an unordered collection of ``HistoryPoint``. The value in force on
a date is the one with the latest effective date not after that date; before
the first point the entity's base value applies.

Two points sharing an effective date are rejected on write
(``ensure_new_effective_date``). For histories that already contain such
duplicates, resolution picks the point inserted last.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..core.exceptions import ValidationError
from .model import HistoryPoint


def sorted_history(history: Iterable[HistoryPoint]) -> list[HistoryPoint]:
    """Most recent first; among equal dates, the later-inserted point first."""
    indexed = list(enumerate(history))
    indexed.sort(key=lambda item: (item[1].effective_date, item[0]), reverse=True)
    return [point for _, point in indexed]


def resolve_as_of(history: Iterable[HistoryPoint], base_value: float, query_date: date) -> float:
    for point in sorted_history(history):
        if point.effective_date <= query_date:
            return point.value
    return base_value


def current_value(history: Iterable[HistoryPoint], base_value: float, horizon: date) -> float:
    return resolve_as_of(history, base_value, horizon)


def ensure_new_effective_date(history: Sequence[HistoryPoint], effective_date: date) -> None:
    if any(point.effective_date == effective_date for point in history):
        raise ValidationError(f"A change effective {effective_date.isoformat()} already exists.")
