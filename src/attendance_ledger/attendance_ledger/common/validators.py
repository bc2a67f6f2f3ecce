from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty.")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be {max_len} characters or less.")
    return value


def require_range(value: Optional[float], field_name: str, low: float, high: float) -> float:
    if value is None or not low <= value <= high:
        raise ValidationError(f"{field_name} must be between {low:g} and {high:g}.")
    return float(value)


def require_not_future(value: Optional[date], field_name: str, horizon: date) -> date:
    if value is None:
        raise ValidationError(f"{field_name} is required.")
    if value > horizon:
        raise ValidationError(f"{field_name} cannot be in the future.")
    return value


def optional_float(value: Any) -> Optional[float]:
    """Form/JSON number; blank means not given."""
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid number: {value!r}")
