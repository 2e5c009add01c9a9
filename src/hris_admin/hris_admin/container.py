from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .audit.mysql_activity_repository import MySQLActivityRepository
from .audit.service import ActivityLogService
from .caching.local_cache import ATTENDANCE_COUNT, SUB_SECTIONS, USERS, LocalDataCache
from .caching.redis_cache import ReportCache
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService, HrisSyncService
from .hris.cache import HrisDataCache
from .hris.client import HrisClient
from .organization.mysql_division_repository import MySQLDivisionRepository
from .organization.mysql_section_repository import MySQLSectionRepository
from .organization.mysql_subsection_repository import MySQLSubSectionRepository
from .organization.service import DivisionService, SectionService, SubSectionService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    divisions_repo: MySQLDivisionRepository
    sections_repo: MySQLSectionRepository
    subsections_repo: MySQLSubSectionRepository
    employees_repo: MySQLEmployeeRepository
    reports_repo: MySQLReportRepository
    activities_repo: MySQLActivityRepository

    report_cache: ReportCache
    hris_client: HrisClient
    hris_cache: HrisDataCache
    local_cache: LocalDataCache

    activity_service: ActivityLogService
    auth_service: AuthService
    user_service: UserService
    division_service: DivisionService
    section_service: SectionService
    subsection_service: SubSectionService
    employee_service: EmployeeService
    hris_sync_service: HrisSyncService
    report_service: ReportService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    redis_config: dict,
    hris_config: dict,
    report_cache: Optional[ReportCache] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    divisions_repo = MySQLDivisionRepository(conn)
    sections_repo = MySQLSectionRepository(conn)
    subsections_repo = MySQLSubSectionRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    reports_repo = MySQLReportRepository(conn)
    activities_repo = MySQLActivityRepository(conn)

    report_cache = report_cache or ReportCache.connect(redis_config)
    hris_client = HrisClient(
        base_url=str(hris_config["base_url"]),
        username=str(hris_config.get("username", "")),
        password=str(hris_config.get("password", "")),
        timeout=float(hris_config.get("timeout", 30)),
    )
    hris_cache = HrisDataCache(hris_client)

    activity_service = ActivityLogService(activities_repo)
    auth_service = AuthService(users_repo, activity_service)
    user_service = UserService(users_repo)
    division_service = DivisionService(divisions_repo, sections_repo, activity_service)
    section_service = SectionService(divisions_repo, sections_repo, subsections_repo, activity_service)
    subsection_service = SubSectionService(divisions_repo, sections_repo, subsections_repo, activity_service)
    employee_service = EmployeeService(employees_repo)
    hris_sync_service = HrisSyncService(hris_client, employees_repo, activity_service)
    report_service = ReportService(reports_repo, report_cache)
    dashboard_service = DashboardService(MySQLDashboardRepository(conn), reports_repo, activity_service)

    local_cache = LocalDataCache(
        {
            SUB_SECTIONS: lambda: [s.to_dict() for s in subsections_repo.list_all()],
            USERS: user_service.list_users,
            ATTENDANCE_COUNT: reports_repo.count_attendance_records,
        }
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        divisions_repo=divisions_repo,
        sections_repo=sections_repo,
        subsections_repo=subsections_repo,
        employees_repo=employees_repo,
        reports_repo=reports_repo,
        activities_repo=activities_repo,
        report_cache=report_cache,
        hris_client=hris_client,
        hris_cache=hris_cache,
        local_cache=local_cache,
        activity_service=activity_service,
        auth_service=auth_service,
        user_service=user_service,
        division_service=division_service,
        section_service=section_service,
        subsection_service=subsection_service,
        employee_service=employee_service,
        hris_sync_service=hris_sync_service,
        report_service=report_service,
        dashboard_service=dashboard_service,
    )
