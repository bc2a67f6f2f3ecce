"""Fetch the store and create default FULL_DAY entries for unrecorded working days.

Safe to run repeatedly: days that already have an entry are skipped.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_ledger.attendance_ledger.common.datetime_utils import now_local
from src.attendance_ledger.attendance_ledger.container import build_container
from src.attendance_ledger.attendance_ledger.logging_utils import setup_json_logging


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_json_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(api_config=settings.API_CONFIG, regular_weekdays=settings.REGULAR_WEEKDAYS)
    report = container.attendance_service.synchronize(horizon=now_local().date())

    print(f"OK: requested={len(report.requested)} created={len(report.created)} failed={len(report.failures)}")
    for failure in report.failures:
        name, day = failure.key
        print(f"  - {name} {day.isoformat()}: {failure.message}")
    if not report.ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
