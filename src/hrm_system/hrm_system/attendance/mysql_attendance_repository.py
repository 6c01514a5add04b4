from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..access.scope import Scope
from ..core.enums import AttendanceStatus, WorkType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, scope_clause, to_float
from .day_state import ALREADY_CHECKED_IN
from .model import TimeEntry
from .repository import TimeEntryRepository

_SELECT = """
    SELECT te.id, te.employee_id, te.work_date, te.check_in, te.check_out,
           te.status, te.overtime, te.location, te.type, te.created_at,
           e.name AS employee_name
    FROM time_entries te
    JOIN employees e ON e.id = te.employee_id
"""


class MySQLAttendanceRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_entry(r: dict) -> TimeEntry:
        return TimeEntry(
            id=int(r["id"]),
            employee_id=int(r["employee_id"]),
            work_date=r["work_date"],
            check_in=normalize_mysql_time(r["check_in"]),
            check_out=normalize_mysql_time(r.get("check_out")),
            status=AttendanceStatus(r["status"]),
            overtime_hours=to_float(r.get("overtime")) or 0.0,
            location=r.get("location"),
            work_type=WorkType(r.get("type") or WorkType.OFFICE.value),
            employee_name=r.get("employee_name"),
            created_at=r.get("created_at"),
        )

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE te.employee_id=%s AND te.work_date=%s", (int(employee_id), work_date))
            r = fetchone(cur)
            return self._to_entry(r) if r else None

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
        # uq_time_entries_employee_date makes concurrent check-ins collide here.
        with db_cursor(self._conn_factory, duplicate_message=ALREADY_CHECKED_IN) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_entries(employee_id, work_date, check_in, location, type, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, check_in, location, work_type.value, status.value),
            )
            return int(cur.lastrowid)

    def close_entry(
        self,
        *,
        entry_id: int,
        check_out: time,
        status: AttendanceStatus,
        overtime_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_entries
                SET check_out=%s, status=%s, overtime=%s
                WHERE id=%s AND check_out IS NULL
                """,
                (check_out, status.value, overtime_hours, int(entry_id)),
            )
            return cur.rowcount > 0

    def list_entries(
        self,
        *,
        scope: Scope,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeEntry]:
        scope_sql, params = scope_clause(
            scope, employee_col="te.employee_id", department_col="e.department", manager_col="e.manager_id"
        )
        clauses = [scope_sql]

        if employee_id is not None:
            clauses.append("te.employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("te.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("te.work_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY te.work_date DESC, te.check_in DESC", tuple(params))
            return [self._to_entry(r) for r in fetchall(cur)]
