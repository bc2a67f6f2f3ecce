from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HistoryPoint:
    """One effective-dated value (a salary or a department's daily hours)."""

    value: float
    effective_date: date
