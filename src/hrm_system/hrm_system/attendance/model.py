from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus, WorkType


@dataclass(frozen=True)
class TimeEntry:
    """Attendance record: one row per employee per day."""

    id: int
    employee_id: int
    work_date: date
    check_in: time
    check_out: Optional[time]
    status: AttendanceStatus
    overtime_hours: float = 0.0
    location: Optional[str] = None
    work_type: WorkType = WorkType.OFFICE
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class AttendanceStats:
    total_days: int
    on_time_days: int
    late_days: int
    early_leave_days: int
    total_overtime: float
    avg_hours_per_day: Optional[float]
