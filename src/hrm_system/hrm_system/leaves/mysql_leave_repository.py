from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..access.scope import Scope
from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scope_clause
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT lr.id, lr.employee_id, lr.type, lr.start_date, lr.end_date, lr.days,
           lr.reason, lr.status, lr.approved_by, lr.created_at,
           e.name AS employee_name, a.name AS approved_by_name
    FROM leave_requests lr
    JOIN employees e ON e.id = lr.employee_id
    LEFT JOIN employees a ON a.id = lr.approved_by
"""


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_request(r: dict) -> LeaveRequest:
        return LeaveRequest(
            id=int(r["id"]),
            employee_id=int(r["employee_id"]),
            leave_type=LeaveType(r["type"]),
            start_date=r["start_date"],
            end_date=r["end_date"],
            days=int(r["days"]),
            reason=r.get("reason"),
            status=RequestStatus(r["status"]),
            approved_by=r.get("approved_by"),
            employee_name=r.get("employee_name"),
            approved_by_name=r.get("approved_by_name"),
            created_at=r.get("created_at"),
        )

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, type, start_date, end_date, days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(days),
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE lr.id=%s", (int(request_id),))
            r = fetchone(cur)
            return self._to_request(r) if r else None

    def list_requests(
        self,
        *,
        scope: Scope,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        leave_type: Optional[LeaveType] = None,
    ) -> Sequence[LeaveRequest]:
        scope_sql, params = scope_clause(
            scope, employee_col="lr.employee_id", department_col="e.department", manager_col="e.manager_id"
        )
        clauses = [scope_sql]

        if employee_id is not None:
            clauses.append("lr.employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("lr.status=%s")
            params.append(status.value)
        if leave_type is not None:
            clauses.append("lr.type=%s")
            params.append(leave_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY lr.created_at DESC, lr.id DESC", tuple(params))
            return [self._to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: RequestStatus, approved_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, int(approved_by), int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
