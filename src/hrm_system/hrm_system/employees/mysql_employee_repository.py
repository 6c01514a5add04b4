from __future__ import annotations

from typing import Optional, Sequence

from ..access.scope import Scope
from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list, scope_clause, to_float
from .model import Employee, EmployeeData
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.id, e.employee_code, e.user_id, e.name, e.email, e.phone,
           e.department, e.position, e.manager_id, e.join_date, e.salary,
           e.status, e.skills, e.kpi, e.created_at,
           m.name AS manager_name
    FROM employees e
    LEFT JOIN employees m ON m.id = e.manager_id
"""

_DUPLICATE = "Employee code or email already exists"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_employee(r: dict) -> Employee:
        return Employee(
            id=int(r["id"]),
            employee_code=r["employee_code"],
            user_id=r.get("user_id"),
            name=r["name"],
            email=r["email"],
            phone=r.get("phone"),
            department=r.get("department"),
            position=r.get("position"),
            manager_id=r.get("manager_id"),
            join_date=r.get("join_date"),
            salary=to_float(r.get("salary")),
            status=EmployeeStatus(r.get("status") or EmployeeStatus.ACTIVE.value),
            skills=tuple(load_json_list(r.get("skills"))),
            kpi=to_float(r.get("kpi")) or 0.0,
            manager_name=r.get("manager_name"),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.id=%s", (int(employee_id),))
            r = fetchone(cur)
            return self._to_employee(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return self._to_employee(r) if r else None

    def list_employees(
        self,
        *,
        scope: Scope,
        department: Optional[str] = None,
        status: Optional[EmployeeStatus] = None,
        search: Optional[str] = None,
    ) -> Sequence[Employee]:
        scope_sql, params = scope_clause(
            scope, employee_col="e.id", department_col="e.department", manager_col="e.manager_id"
        )
        clauses = [scope_sql]

        if department:
            clauses.append("e.department=%s")
            params.append(department)
        if status is not None:
            clauses.append("e.status=%s")
            params.append(status.value)
        if search:
            like = f"%{search}%"
            clauses.append("(e.name LIKE %s OR e.employee_code LIKE %s OR e.email LIKE %s)")
            params.extend([like, like, like])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY e.created_at DESC, e.id DESC", tuple(params))
            return [self._to_employee(r) for r in fetchall(cur)]

    def create(self, data: EmployeeData) -> int:
        with db_cursor(self._conn_factory, duplicate_message=_DUPLICATE) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    employee_code, user_id, name, email, phone, department, position,
                    manager_id, join_date, salary, status, skills, kpi
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.employee_code,
                    data.user_id,
                    data.name,
                    data.email,
                    data.phone,
                    data.department,
                    data.position,
                    data.manager_id,
                    data.join_date,
                    data.salary,
                    data.status.value,
                    dump_json_list(list(data.skills)),
                    data.kpi,
                ),
            )
            return int(cur.lastrowid)

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        with db_cursor(self._conn_factory, duplicate_message=_DUPLICATE) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET employee_code=%s, name=%s, email=%s, phone=%s, department=%s, position=%s,
                    manager_id=%s, join_date=%s, salary=%s, status=%s, skills=%s, kpi=%s
                WHERE id=%s
                """,
                (
                    data.employee_code,
                    data.name,
                    data.email,
                    data.phone,
                    data.department,
                    data.position,
                    data.manager_id,
                    data.join_date,
                    data.salary,
                    data.status.value,
                    dump_json_list(list(data.skills)),
                    data.kpi,
                    int(employee_id),
                ),
            )
            # MySQL reports 0 affected rows when nothing changed; existence is checked by the service.
            return cur.rowcount >= 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0
