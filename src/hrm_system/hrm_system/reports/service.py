from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..access.policy import ensure_can_review, require_employee, require_role, scope_for
from ..access.scope import CallerContext
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_str,
    parse_enum,
    parse_filter_enum,
    parse_float,
    parse_optional_date,
    parse_optional_int,
    require_non_empty,
)
from ..core.constants import MAX_REPORT_HOURS
from ..core.enums import APPROVER_ROLES, ReportStatus, ReportType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..tasks.repository import TaskRepository
from .model import NewWorkReport, WorkReport
from .repository import WorkReportRepository

logger = logging.getLogger(__name__)

DECISIONS = (ReportStatus.APPROVED, ReportStatus.REJECTED)


class WorkReportService:
    def __init__(self, reports: WorkReportRepository, employees: EmployeeRepository, tasks: TaskRepository):
        self._reports = reports
        self._employees = employees
        self._tasks = tasks

    def submit(self, caller: CallerContext, payload: Mapping[str, Any], *, today: Optional[date] = None) -> int:
        return self._create(caller, payload, ReportStatus.SUBMITTED, today=today)

    def save_draft(self, caller: CallerContext, payload: Mapping[str, Any], *, today: Optional[date] = None) -> int:
        return self._create(caller, payload, ReportStatus.DRAFT, today=today)

    def _create(
        self,
        caller: CallerContext,
        payload: Mapping[str, Any],
        status: ReportStatus,
        *,
        today: Optional[date] = None,
    ) -> int:
        employee = require_employee(caller)

        hours = parse_float(payload.get("hours_spent"), "hours_spent")
        if not 0 < hours <= MAX_REPORT_HOURS:
            raise ValidationError(f"hours_spent must be greater than 0 and at most {MAX_REPORT_HOURS}")

        task_id = parse_optional_int(payload.get("task_id"), "task_id")
        if task_id is not None and not self._tasks.get_by_id(task_id):
            raise ValidationError("Task does not exist")

        data = NewWorkReport(
            employee_id=employee.id,
            task_id=task_id,
            title=require_non_empty(payload.get("title"), "title"),
            description=optional_str(payload.get("description")),
            report_type=parse_enum(ReportType, payload.get("type"), "type", default=ReportType.ASSIGNED),
            work_date=parse_optional_date(payload.get("date"), "date") or today or now_local().date(),
            hours_spent=round(hours, 2),
            status=status,
        )
        report_id = self._reports.create(data)
        logger.info("Work report %s (%s) saved by employee %s", report_id, status.value, employee.id)
        return report_id

    def list_reports(
        self,
        caller: CallerContext,
        *,
        status: Optional[str] = None,
        report_type: Optional[str] = None,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[WorkReport]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("endDate must be on or after startDate")
        return self._reports.list_reports(
            scope=scope_for(caller),
            employee_id=employee_id,
            status=parse_filter_enum(ReportStatus, status, "status"),
            report_type=parse_filter_enum(ReportType, report_type, "type"),
            start_date=start_date,
            end_date=end_date,
        )

    def decide(
        self, caller: CallerContext, report_id: int, status: Any, feedback: Optional[str] = None
    ) -> WorkReport:
        require_role(caller, APPROVER_ROLES)
        approver = require_employee(caller)
        decision = parse_enum(ReportStatus, status, "status")
        if decision not in DECISIONS:
            raise ValidationError("status must be approved or rejected")

        current = self._reports.get_by_id(int(report_id))
        if not current:
            raise NotFoundError("Work report not found")
        owner = self._employees.get_by_id(current.employee_id)
        if not owner:
            raise NotFoundError("Employee not found")
        ensure_can_review(caller, owner)

        if current.status != ReportStatus.SUBMITTED or not self._reports.decide(
            report_id=current.id, status=decision, approved_by=approver.id, feedback=optional_str(feedback)
        ):
            raise ValidationError("Only submitted reports can be reviewed")

        logger.info("Work report %s %s by employee %s", current.id, decision.value, approver.id)
        return self._reports.get_by_id(current.id)

    def stats(self, caller: CallerContext) -> dict[str, Any]:
        reports = self._reports.list_reports(scope=scope_for(caller))
        counts: dict[str, Any] = {s.value: 0 for s in ReportStatus}
        for r in reports:
            counts[r.status.value] += 1
        counts["total"] = len(reports)
        counts["total_hours"] = round(sum(r.hours_spent for r in reports), 2)
        return counts
