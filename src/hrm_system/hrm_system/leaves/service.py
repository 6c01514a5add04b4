from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..access.policy import ensure_can_review, ensure_in_scope, require_employee, require_role, scope_for
from ..access.scope import GLOBAL_SCOPE, CallerContext
from ..common.datetime_utils import inclusive_days, now_local
from ..common.validators import optional_str, parse_date, parse_enum, parse_filter_enum
from ..core.enums import APPROVER_ROLES, LeaveType, RequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import BalanceLine, LeaveRequest
from .policy import LeavePolicy
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISIONS = (RequestStatus.APPROVED, RequestStatus.REJECTED)


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        policy: Optional[LeavePolicy] = None,
    ):
        self._leaves = leaves
        self._employees = employees
        self._policy = policy or LeavePolicy()

    def request_leave(
        self,
        caller: CallerContext,
        *,
        leave_type: str,
        start_date: str | date,
        end_date: str | date,
        reason: Optional[str] = None,
    ) -> LeaveRequest:
        employee = require_employee(caller)
        kind = parse_enum(LeaveType, leave_type, "type")
        start = parse_date(start_date, "startDate")
        end = parse_date(end_date, "endDate")
        if end < start:
            raise ValidationError("endDate must be on or after startDate")

        days = inclusive_days(start, end)

        approved = self._leaves.list_requests(
            scope=GLOBAL_SCOPE, employee_id=employee.id, status=RequestStatus.APPROVED
        )
        if any(r.overlaps(start, end) for r in approved):
            logger.warning(
                "Leave request of employee %s (%s..%s) overlaps an approved leave", employee.id, start, end
            )

        request_id = self._leaves.create(
            employee_id=employee.id,
            leave_type=kind,
            start_date=start,
            end_date=end,
            days=days,
            reason=optional_str(reason),
        )
        logger.info("Leave request %s created for employee %s (%s days)", request_id, employee.id, days)
        return LeaveRequest(
            id=request_id,
            employee_id=employee.id,
            leave_type=kind,
            start_date=start,
            end_date=end,
            days=days,
            reason=optional_str(reason),
            status=RequestStatus.PENDING,
            employee_name=employee.name,
        )

    def list_requests(
        self,
        caller: CallerContext,
        *,
        status: Optional[str] = None,
        leave_type: Optional[str] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(
            scope=scope_for(caller),
            employee_id=employee_id,
            status=parse_filter_enum(RequestStatus, status, "status"),
            leave_type=parse_filter_enum(LeaveType, leave_type, "type"),
        )

    def decide(self, caller: CallerContext, request_id: int, status: str) -> LeaveRequest:
        require_role(caller, APPROVER_ROLES)
        approver = require_employee(caller)
        decision = parse_enum(RequestStatus, status, "status")
        if decision not in DECISIONS:
            raise ValidationError("status must be approved or rejected")

        current = self._leaves.get_by_id(int(request_id))
        if not current:
            raise NotFoundError("Leave request not found")
        ensure_can_review(caller, self._owner(current.employee_id))

        if current.status != RequestStatus.PENDING:
            raise ValidationError("Leave request has already been processed")
        if not self._leaves.decide(request_id=current.id, status=decision, approved_by=approver.id):
            raise ValidationError("Leave request has already been processed")

        logger.info("Leave request %s %s by employee %s", current.id, decision.value, approver.id)
        return self._leaves.get_by_id(current.id)

    def balance(
        self,
        caller: CallerContext,
        employee_id: Optional[int] = None,
        *,
        year: Optional[int] = None,
    ) -> dict[LeaveType, BalanceLine]:
        if employee_id is None:
            employee = require_employee(caller)
        else:
            require_role(caller, APPROVER_ROLES)
            employee = self._owner(int(employee_id))
            ensure_in_scope(caller, employee)

        return self.balance_for(employee, year=year)

    def balance_for(self, employee: Employee, *, year: Optional[int] = None) -> dict[LeaveType, BalanceLine]:
        """remaining = entitlement - approved days of that type starting in `year`."""
        year = year or now_local().year
        approved = self._leaves.list_requests(
            scope=GLOBAL_SCOPE, employee_id=employee.id, status=RequestStatus.APPROVED
        )

        result: dict[LeaveType, BalanceLine] = {}
        for kind, total in self._policy.entitlement_for(employee.status.value).items():
            used = sum(r.days for r in approved if r.leave_type == kind and r.start_date.year == year)
            result[kind] = BalanceLine(total=total, used=used, remaining=total - used)
        return result

    def _owner(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee
