from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional

from .attendance.backfill import AttendanceBackfillScheduler
from .attendance.editor import AttendanceTableEditor
from .attendance.http_entry_repository import HttpEntryRepository
from .attendance.repository import EntryRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from .departments.http_department_repository import HttpDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.http_employee_repository import HttpEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.http_holiday_repository import HttpHolidayRepository
from .holidays.repository import HolidayRepository
from .payroll.payment_tracker import PaymentStatusTracker
from .payroll.service import PayrollReportService
from .remote.client import ApiClient, ApiConfig
from .snapshot import SnapshotSession


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    holidays_repo: HolidayRepository
    entries_repo: EntryRepository

    session: SnapshotSession
    backfill: AttendanceBackfillScheduler
    attendance_service: AttendanceService
    employee_service: EmployeeService
    department_service: DepartmentService
    payroll_report_service: PayrollReportService
    attendance_editor: AttendanceTableEditor
    payment_tracker: PaymentStatusTracker


def build_container_from_repositories(
    *,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    holidays_repo: HolidayRepository,
    entries_repo: EntryRepository,
    regular_weekdays: Optional[AbstractSet[int]] = None,
) -> Container:
    session = SnapshotSession(employees_repo, departments_repo, holidays_repo)
    backfill = AttendanceBackfillScheduler(entries_repo, regular_weekdays=regular_weekdays)

    return Container(
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        holidays_repo=holidays_repo,
        entries_repo=entries_repo,
        session=session,
        backfill=backfill,
        attendance_service=AttendanceService(entries_repo, session, backfill),
        employee_service=EmployeeService(employees_repo, session),
        department_service=DepartmentService(departments_repo, session),
        payroll_report_service=PayrollReportService(session, regular_weekdays=regular_weekdays),
        attendance_editor=AttendanceTableEditor(session, entries_repo, regular_weekdays=regular_weekdays),
        payment_tracker=PaymentStatusTracker(session, employees_repo),
    )


def build_container(*, api_config: dict, regular_weekdays: Optional[AbstractSet[int]] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout_seconds=float(api_config.get("timeout_seconds", DEFAULT_REQUEST_TIMEOUT_SECONDS)),
    )
    client = ApiClient(config)

    return build_container_from_repositories(
        employees_repo=HttpEmployeeRepository(client),
        departments_repo=HttpDepartmentRepository(client),
        holidays_repo=HttpHolidayRepository(client),
        entries_repo=HttpEntryRepository(client),
        regular_weekdays=regular_weekdays,
    )
