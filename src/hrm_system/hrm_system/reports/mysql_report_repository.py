from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..access.scope import Scope
from ..core.enums import ReportStatus, ReportType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, scope_clause, to_float
from .model import NewWorkReport, WorkReport
from .repository import WorkReportRepository

_SELECT = """
    SELECT wr.id, wr.employee_id, wr.task_id, wr.title, wr.description, wr.type, wr.date,
           wr.hours_spent, wr.status, wr.approved_by, wr.feedback, wr.created_at,
           e.name AS employee_name, t.title AS task_title, a.name AS approved_by_name
    FROM work_reports wr
    JOIN employees e ON e.id = wr.employee_id
    LEFT JOIN tasks t ON t.id = wr.task_id
    LEFT JOIN employees a ON a.id = wr.approved_by
"""


class MySQLWorkReportRepository(WorkReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_report(r: dict) -> WorkReport:
        return WorkReport(
            id=int(r["id"]),
            employee_id=int(r["employee_id"]),
            task_id=r.get("task_id"),
            title=str(r["title"]),
            description=r.get("description"),
            report_type=ReportType(r["type"]),
            work_date=r["date"],
            hours_spent=to_float(r["hours_spent"]) or 0.0,
            status=ReportStatus(r["status"]),
            approved_by=r.get("approved_by"),
            feedback=r.get("feedback"),
            employee_name=r.get("employee_name"),
            task_title=r.get("task_title"),
            approved_by_name=r.get("approved_by_name"),
            created_at=r.get("created_at"),
        )

    def create(self, data: NewWorkReport) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_reports(employee_id, task_id, title, description, type, date, hours_spent, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(data.employee_id),
                    data.task_id,
                    data.title,
                    data.description,
                    data.report_type.value,
                    data.work_date,
                    data.hours_spent,
                    data.status.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE wr.id=%s", (int(report_id),))
            r = fetchone(cur)
            return self._to_report(r) if r else None

    def list_reports(
        self,
        *,
        scope: Scope,
        employee_id: Optional[int] = None,
        status: Optional[ReportStatus] = None,
        report_type: Optional[ReportType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[WorkReport]:
        scope_sql, params = scope_clause(
            scope, employee_col="wr.employee_id", department_col="e.department", manager_col="e.manager_id"
        )
        clauses = [scope_sql]

        if employee_id is not None:
            clauses.append("wr.employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("wr.status=%s")
            params.append(status.value)
        if report_type is not None:
            clauses.append("wr.type=%s")
            params.append(report_type.value)
        if start_date is not None:
            clauses.append("wr.date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("wr.date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY wr.created_at DESC, wr.id DESC", tuple(params))
            return [self._to_report(r) for r in fetchall(cur)]

    def decide(
        self, *, report_id: int, status: ReportStatus, approved_by: int, feedback: Optional[str]
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_reports
                SET status=%s, approved_by=%s, feedback=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, int(approved_by), feedback, int(report_id), ReportStatus.SUBMITTED.value),
            )
            return cur.rowcount > 0
