from __future__ import annotations

from typing import Iterable

from ..core.enums import BACK_OFFICE_ROLES, Role
from ..core.exceptions import AuthorizationError, EmployeeProfileNotFound
from ..employees.model import Employee
from .scope import GLOBAL_SCOPE, CallerContext, Scope


def require_role(caller: CallerContext, roles: Iterable[Role]) -> None:
    if caller.role not in set(roles):
        raise AuthorizationError("Access denied")


def require_employee(caller: CallerContext) -> Employee:
    """The caller's own employee row; its absence is always an error."""
    if caller.employee is None:
        raise EmployeeProfileNotFound()
    return caller.employee


def scope_for(caller: CallerContext) -> Scope:
    if caller.role in BACK_OFFICE_ROLES:
        return GLOBAL_SCOPE

    me = require_employee(caller)
    if caller.role == Role.MANAGER:
        return Scope(manager_id=me.id, department=me.department)
    return Scope(employee_id=me.id)


def ensure_in_scope(caller: CallerContext, employee: Employee) -> Scope:
    scope = scope_for(caller)
    if not scope.covers(employee):
        raise AuthorizationError("Access denied")
    return scope


def ensure_can_review(caller: CallerContext, employee: Employee) -> None:
    """Approvals: the owner must be in scope, and a manager never reviews their own rows."""
    ensure_in_scope(caller, employee)
    if caller.role == Role.MANAGER and caller.employee is not None and caller.employee.id == employee.id:
        raise AuthorizationError("You cannot review your own request")
