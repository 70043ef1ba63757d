from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceRegisterService
from .core.constants import DEFAULT_ACCESS_PASSWORD
from .database.connection import DBConfig, DatabaseConnection
from .followups.mysql_follow_up_repository import MySQLFollowUpRepository
from .followups.repository import FollowUpRepository
from .followups.service import FollowUpService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .reports.service import FrequencyReportService
from .schedules.service import ServiceCalendarService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .units.mysql_unit_repository import MySQLUnitRepository
from .units.repository import UnitRepository


@dataclass(frozen=True)
class Container:
    units_repo: UnitRepository
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    follow_ups_repo: FollowUpRepository
    settings_repo: SettingsRepository

    settings_service: SettingsService
    calendar_service: ServiceCalendarService
    member_service: MemberService
    register_service: AttendanceRegisterService
    report_service: FrequencyReportService
    follow_up_service: FollowUpService


def assemble(
    *,
    units_repo: UnitRepository,
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    follow_ups_repo: FollowUpRepository,
    settings_repo: SettingsRepository,
    default_password: str = DEFAULT_ACCESS_PASSWORD,
) -> Container:
    settings_service = SettingsService(settings_repo, default_password=default_password)
    calendar_service = ServiceCalendarService(units_repo)
    member_service = MemberService(members_repo, units_repo)
    register_service = AttendanceRegisterService(attendance_repo, members_repo)
    report_service = FrequencyReportService(calendar_service, members_repo, attendance_repo, settings_service)
    follow_up_service = FollowUpService(follow_ups_repo, report_service)

    return Container(
        units_repo=units_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        follow_ups_repo=follow_ups_repo,
        settings_repo=settings_repo,
        settings_service=settings_service,
        calendar_service=calendar_service,
        member_service=member_service,
        register_service=register_service,
        report_service=report_service,
        follow_up_service=follow_up_service,
    )


def build_container(*, db_config: dict, default_password: str = DEFAULT_ACCESS_PASSWORD) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        units_repo=MySQLUnitRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        follow_ups_repo=MySQLFollowUpRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        default_password=default_password,
    )
