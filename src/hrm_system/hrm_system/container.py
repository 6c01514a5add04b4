from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assets.mysql_asset_repository import MySQLAssetRepository
from .assets.repository import AssetRepository
from .assets.service import AssetService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.repository import TimeEntryRepository
from .attendance.service import AttendanceService
from .auth.mysql_user_repository import MySQLUserRepository
from .auth.repository import UserRepository
from .auth.service import AuthService
from .auth.tokens import TokenCodec
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.policy import LeavePolicy
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .reports.mysql_report_repository import MySQLWorkReportRepository
from .reports.repository import WorkReportRepository
from .reports.service import WorkReportService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    employees_repo: EmployeeRepository
    time_entries_repo: TimeEntryRepository
    leaves_repo: LeaveRepository
    tasks_repo: TaskRepository
    assets_repo: AssetRepository
    reports_repo: WorkReportRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    task_service: TaskService
    asset_service: AssetService
    report_service: WorkReportService
    dashboard_service: DashboardService


def assemble(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    time_entries_repo: TimeEntryRepository,
    leaves_repo: LeaveRepository,
    tasks_repo: TaskRepository,
    assets_repo: AssetRepository,
    reports_repo: WorkReportRepository,
    token_codec: TokenCodec,
    attendance_policy: Optional[AttendancePolicy] = None,
    leave_policy: Optional[LeavePolicy] = None,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""

    auth_service = AuthService(users_repo, employees_repo, token_codec)
    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(time_entries_repo, attendance_policy)
    leave_service = LeaveService(leaves_repo, employees_repo, leave_policy)
    task_service = TaskService(tasks_repo, employees_repo)
    asset_service = AssetService(assets_repo, employees_repo)
    report_service = WorkReportService(reports_repo, employees_repo, tasks_repo)
    dashboard_service = DashboardService(
        employees=employee_service,
        attendance=attendance_service,
        leaves=leave_service,
        tasks=task_service,
        assets=asset_service,
        reports=report_service,
    )

    return Container(
        users_repo=users_repo,
        employees_repo=employees_repo,
        time_entries_repo=time_entries_repo,
        leaves_repo=leaves_repo,
        tasks_repo=tasks_repo,
        assets_repo=assets_repo,
        reports_repo=reports_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        task_service=task_service,
        asset_service=asset_service,
        report_service=report_service,
        dashboard_service=dashboard_service,
    )


def build_container(
    *,
    db_config: dict,
    token_codec: TokenCodec,
    attendance_policy: Optional[AttendancePolicy] = None,
    leave_policy: Optional[LeavePolicy] = None,
) -> Container:
    conn = DatabaseConnection.from_settings(db_config)

    return assemble(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        time_entries_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        assets_repo=MySQLAssetRepository(conn),
        reports_repo=MySQLWorkReportRepository(conn),
        token_codec=token_codec,
        attendance_policy=attendance_policy,
        leave_policy=leave_policy,
    )
