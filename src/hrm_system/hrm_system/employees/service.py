from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..access.policy import ensure_in_scope, require_role, scope_for
from ..access.scope import CallerContext
from ..common.validators import (
    optional_str,
    parse_enum,
    parse_filter_enum,
    parse_float,
    parse_optional_date,
    parse_optional_float,
    parse_optional_int,
    require_non_empty,
)
from ..core.enums import BACK_OFFICE_ROLES, EmployeeStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _parse_skills(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError("skills must be a list")
    return tuple(str(s).strip() for s in value if str(s).strip())


def employee_data_from_payload(payload: Mapping[str, Any], current: Optional[Employee] = None) -> EmployeeData:
    """Build validated input; on update, missing keys keep the current values."""

    def pick(key: str, default: Any = None) -> Any:
        if key in payload:
            return payload[key]
        if current is not None:
            return getattr(current, key)
        return default

    return EmployeeData(
        employee_code=require_non_empty(pick("employee_code"), "employee_code"),
        name=require_non_empty(pick("name"), "name"),
        email=require_non_empty(pick("email"), "email"),
        phone=optional_str(pick("phone")),
        department=optional_str(pick("department")),
        position=optional_str(pick("position")),
        manager_id=parse_optional_int(pick("manager_id"), "manager_id"),
        join_date=parse_optional_date(pick("join_date"), "join_date"),
        salary=parse_optional_float(pick("salary"), "salary"),
        status=parse_enum(EmployeeStatus, pick("status"), "status", default=EmployeeStatus.ACTIVE),
        skills=_parse_skills(pick("skills")),
        kpi=parse_float(pick("kpi", 0) or 0, "kpi"),
        user_id=parse_optional_int(pick("user_id"), "user_id"),
    )


class EmployeeService:
    """Use case: employee directory (read scoped, write admin/hr)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(
        self,
        caller: CallerContext,
        *,
        department: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        return self._employees.list_employees(
            scope=scope_for(caller),
            department=optional_str(department) if department != "all" else None,
            status=parse_filter_enum(EmployeeStatus, status, "status"),
            search=optional_str(search),
        )

    def get_employee(self, caller: CallerContext, employee_id: int) -> Employee:
        employee = self.require_existing(employee_id)
        ensure_in_scope(caller, employee)
        return employee

    def require_existing(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _check_manager(self, data: EmployeeData, employee_id: Optional[int] = None) -> None:
        if data.manager_id is None:
            return
        if employee_id is not None and data.manager_id == employee_id:
            raise ValidationError("An employee cannot be their own manager")
        if not self._employees.get_by_id(data.manager_id):
            raise ValidationError("Manager does not exist")

    def create_employee(self, caller: CallerContext, payload: Mapping[str, Any]) -> int:
        require_role(caller, BACK_OFFICE_ROLES)
        data = employee_data_from_payload(payload)
        self._check_manager(data)
        employee_id = self._employees.create(data)
        logger.info("Employee %s created by user %s", data.employee_code, caller.user_id)
        return employee_id

    def update_employee(self, caller: CallerContext, employee_id: int, payload: Mapping[str, Any]) -> Employee:
        require_role(caller, BACK_OFFICE_ROLES)
        current = self.require_existing(employee_id)
        data = employee_data_from_payload(payload, current)
        # The account link is managed by seeding/account tools, not this endpoint.
        data = replace(data, user_id=current.user_id)
        self._check_manager(data, current.id)
        self._employees.update(current.id, data)
        return self.require_existing(current.id)

    def delete_employee(self, caller: CallerContext, employee_id: int) -> None:
        require_role(caller, BACK_OFFICE_ROLES)
        current = self.require_existing(employee_id)
        if caller.employee is not None and caller.employee.id == current.id:
            raise ValidationError("You cannot delete your own employee profile")
        if not self._employees.delete(current.id):
            raise NotFoundError("Employee not found")
        logger.info("Employee %s deleted by user %s", current.employee_code, caller.user_id)
