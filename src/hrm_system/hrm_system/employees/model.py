from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Employee profile.

    The ownership anchor for every self-service query: a user account sees
    "its" rows through the employee row linked by `user_id`.
    """

    id: int
    employee_code: str
    name: str
    email: str
    user_id: Optional[int] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    join_date: Optional[date] = None
    salary: Optional[float] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    skills: tuple[str, ...] = ()
    kpi: float = 0.0
    manager_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class EmployeeData:
    """Validated input for create/update (everything but the primary key)."""

    employee_code: str
    name: str
    email: str
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    manager_id: Optional[int] = None
    join_date: Optional[date] = None
    salary: Optional[float] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    skills: tuple[str, ...] = field(default_factory=tuple)
    kpi: float = 0.0
    user_id: Optional[int] = None
