from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..access.policy import require_employee
from ..access.scope import CallerContext
from ..assets.service import AssetService
from ..attendance.service import AttendanceService
from ..common.datetime_utils import hours_between, now_local, week_bounds
from ..core.constants import RECENT_ACTIVITY_LIMIT
from ..core.enums import BACK_OFFICE_ROLES, EmployeeStatus, LeaveType, Role, TaskStatus
from ..employees.service import EmployeeService
from ..leaves.service import LeaveService
from ..reports.service import WorkReportService
from ..tasks.service import TaskService

OPEN_TASK_STATUSES = (TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS, TaskStatus.OVERDUE)


@dataclass(frozen=True)
class Activity:
    type: str
    id: int
    employee_name: Optional[str]
    created_at: Optional[datetime]
    detail: str


class DashboardService:
    """Read-only overview composed from the feature services.

    Every figure goes through the owning service, so it carries the same
    role/ownership scope as the corresponding list endpoint.
    """

    def __init__(
        self,
        *,
        employees: EmployeeService,
        attendance: AttendanceService,
        leaves: LeaveService,
        tasks: TaskService,
        assets: AssetService,
        reports: WorkReportService,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._tasks = tasks
        self._assets = assets
        self._reports = reports

    def stats(self, caller: CallerContext, *, today: Optional[date] = None) -> dict[str, Any]:
        today = today or now_local().date()
        if caller.role in BACK_OFFICE_ROLES:
            return self._back_office_stats(caller, today)
        if caller.role == Role.MANAGER:
            return self._manager_stats(caller, today)
        return self._employee_stats(caller, today)

    def _back_office_stats(self, caller: CallerContext, today: date) -> dict[str, Any]:
        staff = self._employees.list_employees(caller)
        assets = self._assets.stats(caller)
        tasks = self._tasks.list_tasks(caller, today=today)
        return {
            "total_employees": len(staff),
            "active_employees": sum(1 for e in staff if e.status == EmployeeStatus.ACTIVE),
            "probation_employees": sum(1 for e in staff if e.status == EmployeeStatus.PROBATION),
            "pending_leaves": len(self._leaves.list_requests(caller, status="pending")),
            "open_tasks": sum(1 for t in tasks if t.status in OPEN_TASK_STATUSES),
            "total_assets": assets.total,
            "available_assets": assets.available,
            "today_attendance": len(self._attendance.history(caller, start_date=today, end_date=today)),
        }

    def _manager_stats(self, caller: CallerContext, today: date) -> dict[str, Any]:
        me = require_employee(caller)
        team = self._employees.list_employees(caller, status=EmployeeStatus.ACTIVE.value)
        pending = self._leaves.list_requests(caller, status="pending")
        tasks = self._tasks.list_tasks(caller, today=today)
        return {
            "team_members": sum(1 for e in team if e.id != me.id),
            "pending_approvals": sum(1 for r in pending if r.employee_id != me.id),
            "active_projects": sum(
                1 for t in tasks if t.assigned_by == me.id and t.status in OPEN_TASK_STATUSES
            ),
        }

    def _employee_stats(self, caller: CallerContext, today: date) -> dict[str, Any]:
        me = require_employee(caller)
        tasks = self._tasks.list_tasks(caller, assigned_to=me.id, today=today)
        balance = self._leaves.balance_for(me, year=today.year)
        annual = balance.get(LeaveType.ANNUAL)

        start, end = week_bounds(today)
        week = self._attendance.history(caller, start_date=start, end_date=end)
        hours = sum(hours_between(e.check_in, e.check_out) for e in week if e.check_out is not None)

        return {
            "active_tasks": sum(1 for t in tasks if t.status in OPEN_TASK_STATUSES),
            "remaining_leaves": annual.remaining if annual else 0,
            "weekly_hours": round(hours, 1),
        }

    def recent_activities(self, caller: CallerContext) -> Sequence[Activity]:
        """Pending leave requests and submitted work reports, newest first."""
        items = [
            Activity(
                type="leave_request",
                id=r.id,
                employee_name=r.employee_name,
                created_at=r.created_at,
                detail=r.leave_type.value,
            )
            for r in self._leaves.list_requests(caller, status="pending")
        ]
        items += [
            Activity(
                type="work_report",
                id=r.id,
                employee_name=r.employee_name,
                created_at=r.created_at,
                detail=r.title,
            )
            for r in self._reports.list_reports(caller, status="submitted")
        ]
        items.sort(key=lambda a: a.created_at or datetime.min, reverse=True)
        return items[:RECENT_ACTIVITY_LIMIT]
