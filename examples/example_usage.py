"""Example: month summaries through the service layer (no Flask)."""

import importlib

from config import get_settings_module

from src.attendance_ledger.attendance_ledger.common.datetime_utils import month_key, now_local
from src.attendance_ledger.attendance_ledger.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG, regular_weekdays=settings.REGULAR_WEEKDAYS)

    today = now_local().date()
    for s in container.payroll_report_service.month_summaries(month_key(today), horizon=today):
        print(f"{s.employee_name:<20} {s.total_hours:>7.1f}h  pay={s.total_pay:>10.2f}  variance={s.variance:>10.2f}")


if __name__ == "__main__":
    main()
