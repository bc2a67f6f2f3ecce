from __future__ import annotations

from datetime import date, time

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceEntry, WorkAssignment
from src.attendance_ledger.attendance_ledger.calendar_rules.engine import CalendarRuleEngine
from src.attendance_ledger.attendance_ledger.core.enums import StatusKind, WorkType
from src.attendance_ledger.attendance_ledger.employees.model import Employee

HORIZON = date(2025, 3, 20)
HOLIDAY = date(2025, 3, 5)  # Wednesday


def _emp(**kw) -> Employee:
    defaults = dict(name="An", base_salary=26000, start_date=date(2025, 3, 3), department="Kitchen")
    defaults.update(kw)
    return Employee(**defaults)


def _engine(**kw) -> CalendarRuleEngine:
    return CalendarRuleEngine({HOLIDAY}, horizon=HORIZON, **kw)


def test_monday_to_saturday_are_regular_by_default():
    engine = _engine()
    assert engine.is_regular_weekday(date(2025, 3, 3))  # Monday
    assert engine.is_regular_weekday(date(2025, 3, 8))  # Saturday
    assert not engine.is_regular_weekday(date(2025, 3, 9))  # Sunday


def test_regular_weekdays_are_configurable():
    engine = _engine(regular_weekdays={0, 1, 2, 3, 4})
    assert not engine.is_regular_weekday(date(2025, 3, 8))


def test_working_day_requires_every_condition():
    engine = _engine()
    emp = _emp(end_date=date(2025, 3, 14))
    assert engine.is_working_day(date(2025, 3, 4), emp)
    assert not engine.is_working_day(HOLIDAY, emp)
    assert not engine.is_working_day(date(2025, 3, 9), emp)  # Sunday
    assert not engine.is_working_day(date(2025, 2, 28), emp)  # before start
    assert not engine.is_working_day(date(2025, 3, 15), emp)  # after end


def test_start_and_end_dates_are_inclusive():
    engine = _engine()
    emp = _emp(end_date=date(2025, 3, 14))
    assert engine.is_working_day(date(2025, 3, 3), emp)
    assert engine.is_working_day(date(2025, 3, 14), emp)


def test_days_after_horizon_are_not_working_days():
    engine = _engine()
    assert engine.is_working_day(HORIZON, _emp())
    assert not engine.is_working_day(date(2025, 3, 21), _emp())


def test_holiday_takes_precedence_over_recorded_entry():
    emp = _emp(entries=(AttendanceEntry(work_date=HOLIDAY, assignment=WorkAssignment.full_day()),))
    assert _engine().derive_status(HOLIDAY, emp).kind == StatusKind.HOLIDAY


def test_inactive_day_reports_inactive():
    assert _engine().derive_status(date(2025, 2, 27), _emp()).kind == StatusKind.INACTIVE


def test_recorded_entry_is_returned_as_is():
    entry = AttendanceEntry(work_date=date(2025, 3, 4), assignment=WorkAssignment.custom(time(9), time(13)))
    status = _engine().derive_status(date(2025, 3, 4), _emp(entries=(entry,)))
    assert status.kind == StatusKind.RECORDED
    assert status.assignment.start_time == time(9)


def test_explicit_entry_overrides_persisted_one():
    persisted = AttendanceEntry(work_date=date(2025, 3, 4), assignment=WorkAssignment.full_day())
    override = AttendanceEntry(work_date=date(2025, 3, 4), assignment=WorkAssignment(WorkType.LEAVE))
    status = _engine().derive_status(date(2025, 3, 4), _emp(entries=(persisted,)), override)
    assert status.work_type == WorkType.LEAVE


def test_working_day_without_entry_is_expected_full_day():
    status = _engine().derive_status(date(2025, 3, 4), _emp())
    assert status.kind == StatusKind.EXPECTED
    assert status.work_type == WorkType.FULL_DAY


def test_sunday_and_future_days_are_unset():
    engine = _engine()
    assert engine.derive_status(date(2025, 3, 9), _emp()).kind == StatusKind.UNSET
    assert engine.derive_status(date(2025, 3, 24), _emp()).kind == StatusKind.UNSET
