from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import EmployeeStatus
from .model import Employee, EmployeeData


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_employees(
        self,
        *,
        scope: Scope,
        department: Optional[str] = None,
        status: Optional[EmployeeStatus] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        """Newest first. `search` matches name, employee code or email."""

        raise NotImplementedError

    def create(self, data: EmployeeData) -> int:
        """Raises ConflictError on duplicate employee code or email."""

        raise NotImplementedError

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
