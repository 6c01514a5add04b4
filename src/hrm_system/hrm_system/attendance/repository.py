from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import AttendanceStatus, WorkType
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create_check_in(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: time,
        status: AttendanceStatus,
        location: Optional[str] = None,
        work_type: WorkType = WorkType.OFFICE,
    ) -> int:
        """Raises ConflictError when (employee_id, work_date) already exists."""

        raise NotImplementedError

    def close_entry(
        self,
        *,
        entry_id: int,
        check_out: time,
        status: AttendanceStatus,
        overtime_hours: float,
    ) -> bool:
        """Only closes an entry that is still open; False otherwise."""

        raise NotImplementedError

    def list_entries(
        self,
        *,
        scope: Scope,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        """Newest first."""

        raise NotImplementedError
