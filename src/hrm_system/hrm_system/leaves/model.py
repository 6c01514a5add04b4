from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: Optional[str]
    status: RequestStatus
    approved_by: Optional[int] = None
    employee_name: Optional[str] = None
    approved_by_name: Optional[str] = None
    created_at: Optional[datetime] = None

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and start <= self.end_date


@dataclass(frozen=True)
class BalanceLine:
    total: int
    used: int
    remaining: int
