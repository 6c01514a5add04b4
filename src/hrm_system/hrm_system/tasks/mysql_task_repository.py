from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Sequence

from ..access.scope import Scope
from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list, scope_clause
from .model import NewTask, Task, TaskComment
from .repository import TaskRepository

_SELECT = """
    SELECT t.id, t.title, t.description, t.assigned_to, t.assigned_by, t.department,
           t.priority, t.status, t.progress, t.due_date, t.completed_date, t.attachments,
           t.created_at, e1.name AS assigned_to_name, e2.name AS assigned_by_name
    FROM tasks t
    JOIN employees e1 ON e1.id = t.assigned_to
    JOIN employees e2 ON e2.id = t.assigned_by
"""


def task_scope_clause(scope: Scope) -> tuple[str, list]:
    """Task visibility: the assignee's scope, plus tasks a manager assigned."""
    scope_sql, params = scope_clause(
        scope, employee_col="t.assigned_to", department_col="t.department", manager_col="e1.manager_id"
    )
    if scope.manager_id is not None:
        scope_sql = f"({scope_sql} OR t.assigned_by=%s)"
        params.append(int(scope.manager_id))
    return scope_sql, params


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_task(r: dict, comments: Sequence[TaskComment] = ()) -> Task:
        return Task(
            id=int(r["id"]),
            title=str(r["title"]),
            description=r.get("description"),
            assigned_to=int(r["assigned_to"]),
            assigned_by=int(r["assigned_by"]),
            department=r.get("department"),
            priority=TaskPriority(r["priority"]),
            status=TaskStatus(r["status"]),
            progress=int(r.get("progress") or 0),
            due_date=r.get("due_date"),
            completed_date=r.get("completed_date"),
            attachments=tuple(load_json_list(r.get("attachments"))),
            assigned_to_name=r.get("assigned_to_name"),
            assigned_by_name=r.get("assigned_by_name"),
            created_at=r.get("created_at"),
            comments=tuple(comments),
        )

    @staticmethod
    def _comments_for(cur, task_ids: List[int]) -> Dict[int, List[TaskComment]]:
        by_task: Dict[int, List[TaskComment]] = {tid: [] for tid in task_ids}
        if not task_ids:
            return by_task

        placeholders = ",".join(["%s"] * len(task_ids))
        cur.execute(
            f"""
            SELECT tc.id, tc.task_id, tc.user_id, tc.comment, tc.created_at, u.name AS user_name
            FROM task_comments tc
            JOIN users u ON u.id = tc.user_id
            WHERE tc.task_id IN ({placeholders})
            ORDER BY tc.created_at DESC, tc.id DESC
            """,
            tuple(task_ids),
        )
        for r in fetchall(cur):
            by_task[int(r["task_id"])].append(
                TaskComment(
                    id=int(r["id"]),
                    task_id=int(r["task_id"]),
                    user_id=int(r["user_id"]),
                    comment=str(r["comment"]),
                    user_name=r.get("user_name"),
                    created_at=r.get("created_at"),
                )
            )
        return by_task

    def create(self, data: NewTask) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, assigned_to, assigned_by, department,
                                  priority, status, progress, due_date, attachments)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.title,
                    data.description,
                    int(data.assigned_to),
                    int(data.assigned_by),
                    data.department,
                    data.priority.value,
                    TaskStatus.NOT_STARTED.value,
                    0,
                    data.due_date,
                    dump_json_list(list(data.attachments)),
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.id=%s", (int(task_id),))
            r = fetchone(cur)
            if not r:
                return None
            comments = self._comments_for(cur, [int(r["id"])])
            return self._to_task(r, comments[int(r["id"])])

    def list_tasks(
        self,
        *,
        scope: Scope,
        priority: Optional[TaskPriority] = None,
        assigned_to: Optional[int] = None,
    ) -> Sequence[Task]:
        scope_sql, params = task_scope_clause(scope)
        clauses = [scope_sql]

        if priority is not None:
            clauses.append("t.priority=%s")
            params.append(priority.value)
        if assigned_to is not None:
            clauses.append("t.assigned_to=%s")
            params.append(int(assigned_to))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY t.created_at DESC, t.id DESC", tuple(params))
            rows = fetchall(cur)
            comments = self._comments_for(cur, [int(r["id"]) for r in rows])
            return [self._to_task(r, comments[int(r["id"])]) for r in rows]

    def update_progress(
        self, *, task_id: int, progress: int, status: TaskStatus, completed_date: Optional[date]
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET progress=%s, status=%s, completed_date=%s WHERE id=%s",
                (int(progress), status.value, completed_date, int(task_id)),
            )
            return cur.rowcount > 0

    def update_status(self, *, task_id: int, status: TaskStatus, completed_date: Optional[date]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET status=%s, completed_date=%s WHERE id=%s",
                (status.value, completed_date, int(task_id)),
            )
            return cur.rowcount > 0

    def add_comment(self, *, task_id: int, user_id: int, comment: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO task_comments(task_id, user_id, comment) VALUES(%s,%s,%s)",
                (int(task_id), int(user_id), comment),
            )
            return int(cur.lastrowid)
