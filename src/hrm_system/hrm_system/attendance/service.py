from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Optional, Sequence

from ..access.policy import require_employee, scope_for
from ..access.scope import CallerContext
from ..common.datetime_utils import hours_between, month_bounds, now_local
from ..common.validators import optional_str, parse_enum
from ..core.enums import AttendanceStatus, WorkType
from ..core.exceptions import ValidationError
from . import day_state
from .model import AttendanceStats, TimeEntry
from .policy import AttendancePolicy
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, entries: TimeEntryRepository, policy: Optional[AttendancePolicy] = None):
        self._entries = entries
        self._policy = policy or AttendancePolicy()

    def check_in(
        self,
        caller: CallerContext,
        *,
        location: Optional[str] = None,
        work_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TimeEntry:
        now = now or now_local()
        today = now.date()
        at = now.time().replace(microsecond=0)
        employee = require_employee(caller)
        kind = parse_enum(WorkType, work_type, "type", default=WorkType.OFFICE)

        existing = self._entries.get_for_employee_and_date(employee.id, today)
        opened = day_state.check_in(day_state.state_of(existing), at, self._policy)

        entry_id = self._entries.create_check_in(
            employee_id=employee.id,
            work_date=today,
            check_in=opened.check_in,
            status=opened.status,
            location=optional_str(location),
            work_type=kind,
        )
        logger.info("Employee %s checked in at %s (%s)", employee.id, at, opened.status.value)
        return TimeEntry(
            id=entry_id,
            employee_id=employee.id,
            work_date=today,
            check_in=opened.check_in,
            check_out=None,
            status=opened.status,
            location=optional_str(location),
            work_type=kind,
            employee_name=employee.name,
        )

    def check_out(self, caller: CallerContext, *, now: Optional[datetime] = None) -> TimeEntry:
        now = now or now_local()
        today = now.date()
        at = now.time().replace(microsecond=0)
        employee = require_employee(caller)

        existing = self._entries.get_for_employee_and_date(employee.id, today)
        closed = day_state.check_out(day_state.state_of(existing), at, self._policy)

        if not self._entries.close_entry(
            entry_id=existing.id,
            check_out=closed.check_out,
            status=closed.status,
            overtime_hours=closed.overtime_hours,
        ):
            # Lost a race with another checkout of the same entry.
            raise ValidationError(day_state.NOT_CHECKED_IN)

        logger.info("Employee %s checked out at %s (overtime %.2fh)", employee.id, at, closed.overtime_hours)
        return TimeEntry(
            id=existing.id,
            employee_id=employee.id,
            work_date=today,
            check_in=closed.check_in,
            check_out=closed.check_out,
            status=closed.status,
            overtime_hours=closed.overtime_hours,
            location=existing.location,
            work_type=existing.work_type,
            employee_name=employee.name,
        )

    def history(
        self,
        caller: CallerContext,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[TimeEntry]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("endDate must be on or after startDate")
        return self._entries.list_entries(
            scope=scope_for(caller),
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
        )

    def stats(
        self,
        caller: CallerContext,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceStats:
        today = today or now_local().date()
        if month is None:
            month = today.month
        if year is None:
            year = today.year
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        if not MINYEAR <= year <= MAXYEAR:
            raise ValidationError(f"year must be between {MINYEAR} and {MAXYEAR}")

        start, end = month_bounds(year, month)
        entries = self._entries.list_entries(
            scope=scope_for(caller), employee_id=employee_id, start_date=start, end_date=end
        )
        return summarize(entries)


def summarize(entries: Sequence[TimeEntry]) -> AttendanceStats:
    closed_hours = [hours_between(e.check_in, e.check_out) for e in entries if e.check_out is not None]
    return AttendanceStats(
        total_days=len(entries),
        on_time_days=sum(1 for e in entries if e.status == AttendanceStatus.ON_TIME),
        late_days=sum(1 for e in entries if e.status == AttendanceStatus.LATE),
        early_leave_days=sum(1 for e in entries if e.status == AttendanceStatus.EARLY_LEAVE),
        total_overtime=round(sum(e.overtime_hours for e in entries), 2),
        avg_hours_per_day=round(sum(closed_hours) / len(closed_hours), 2) if closed_hours else None,
    )
