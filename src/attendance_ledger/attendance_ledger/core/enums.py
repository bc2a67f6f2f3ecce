from __future__ import annotations

from enum import Enum


class WorkType(str, Enum):
    """Classification of one day's attendance record."""

    FULL_DAY = "FULL_DAY"
    HALF_DAY = "HALF_DAY"
    CUSTOM = "CUSTOM"
    CUSTOM_HOURS = "CUSTOM_HOURS"
    LEAVE = "LEAVE"


class StatusKind(str, Enum):
    """Discriminant of a derived per-day status."""

    HOLIDAY = "HOLIDAY"
    INACTIVE = "INACTIVE"
    RECORDED = "RECORDED"
    EXPECTED = "EXPECTED"
    UNSET = "UNSET"


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class PaymentMethod(str, Enum):
    BANK = "bank"
    CASH = "cash"
    ALL = "all"


class EditMode(str, Enum):
    """State of an editable table: no buffer (VIEW) or open buffer (EDIT)."""

    VIEW = "VIEW"
    EDIT = "EDIT"
