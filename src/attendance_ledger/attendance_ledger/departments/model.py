from __future__ import annotations

from dataclasses import dataclass

from ..history.model import HistoryPoint


@dataclass(frozen=True)
class Department:
    name: str
    hours: float
    hours_history: tuple[HistoryPoint, ...] = ()
