from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..auth.model import User
from ..core.enums import Role
from ..employees.model import Employee


@dataclass(frozen=True)
class CallerContext:
    """Identity of the current request, built from the bearer token.

    Passed explicitly to every service call; there is no global "current user".
    """

    user: User
    employee: Optional[Employee] = None

    @property
    def role(self) -> Role:
        return self.user.role

    @property
    def user_id(self) -> int:
        return self.user.id


@dataclass(frozen=True)
class Scope:
    """Row filter derived from the caller.

    - global: every field None (admin / hr)
    - own rows: `employee_id` set (employee)
    - team: `manager_id` set; rows of the manager, of their direct reports and
      of their department (manager)
    """

    employee_id: Optional[int] = None
    manager_id: Optional[int] = None
    department: Optional[str] = None

    @property
    def is_global(self) -> bool:
        return self.employee_id is None and self.manager_id is None

    def covers(self, employee: Employee) -> bool:
        if self.employee_id is not None:
            return employee.id == self.employee_id
        if self.manager_id is not None:
            return (
                employee.id == self.manager_id
                or employee.manager_id == self.manager_id
                or (self.department is not None and employee.department == self.department)
            )
        return True


GLOBAL_SCOPE = Scope()
