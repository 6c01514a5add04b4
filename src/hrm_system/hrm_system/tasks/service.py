from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..access.policy import ensure_in_scope, require_employee, require_role, scope_for
from ..access.scope import CallerContext
from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_str,
    parse_enum,
    parse_filter_enum,
    parse_int,
    parse_optional_date,
    parse_optional_int,
    require_non_empty,
)
from ..core.enums import APPROVER_ROLES, TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import NewTask, Task, TaskComment
from .repository import TaskRepository

logger = logging.getLogger(__name__)


def status_for_progress(progress: int) -> TaskStatus:
    if progress == 0:
        return TaskStatus.NOT_STARTED
    if progress == 100:
        return TaskStatus.COMPLETED
    return TaskStatus.IN_PROGRESS


class TaskService:
    """Task assignment and progress tracking.

    `overdue` is never stored: every read reports it for unfinished tasks whose
    due date has passed, and clients cannot set it.
    """

    def __init__(self, tasks: TaskRepository, employees: EmployeeRepository):
        self._tasks = tasks
        self._employees = employees

    def create_task(self, caller: CallerContext, payload: Mapping[str, Any]) -> int:
        require_role(caller, APPROVER_ROLES)
        assigner = require_employee(caller)

        assigned_to = parse_optional_int(payload.get("assigned_to"), "assigned_to")
        if assigned_to is None:
            raise ValidationError("assigned_to is required")
        assignee = self._employees.get_by_id(assigned_to)
        if not assignee:
            raise ValidationError("Assignee does not exist")
        ensure_in_scope(caller, assignee)

        attachments = payload.get("attachments") or []
        if not isinstance(attachments, (list, tuple)):
            raise ValidationError("attachments must be a list")

        data = NewTask(
            title=require_non_empty(payload.get("title"), "title"),
            description=optional_str(payload.get("description")),
            assigned_to=assignee.id,
            assigned_by=assigner.id,
            department=optional_str(payload.get("department")) or assignee.department,
            priority=parse_enum(TaskPriority, payload.get("priority"), "priority", default=TaskPriority.MEDIUM),
            due_date=parse_optional_date(payload.get("due_date"), "due_date"),
            attachments=tuple(str(a) for a in attachments),
        )
        task_id = self._tasks.create(data)
        logger.info("Task %s assigned to employee %s by employee %s", task_id, assignee.id, assigner.id)
        return task_id

    def list_tasks(
        self,
        caller: CallerContext,
        *,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Sequence[Task]:
        today = today or now_local().date()
        wanted = parse_filter_enum(TaskStatus, status, "status")
        tasks = self._tasks.list_tasks(
            scope=scope_for(caller),
            priority=parse_filter_enum(TaskPriority, priority, "priority"),
            assigned_to=assigned_to,
        )
        result = [replace(t, status=t.effective_status(today)) for t in tasks]
        if wanted is not None:
            result = [t for t in result if t.status == wanted]
        return result

    def get_task(self, caller: CallerContext, task_id: int, *, today: Optional[date] = None) -> Task:
        today = today or now_local().date()
        task = self._accessible(caller, task_id)
        return replace(task, status=task.effective_status(today))

    def update_progress(
        self, caller: CallerContext, task_id: int, progress: Any, *, today: Optional[date] = None
    ) -> Task:
        today = today or now_local().date()
        value = parse_int(progress, "progress")
        if not 0 <= value <= 100:
            raise ValidationError("progress must be between 0 and 100")

        task = self._accessible(caller, task_id)
        status = status_for_progress(value)
        self._tasks.update_progress(
            task_id=task.id,
            progress=value,
            status=status,
            completed_date=today if status == TaskStatus.COMPLETED else None,
        )
        return self.get_task(caller, task.id, today=today)

    def update_status(
        self, caller: CallerContext, task_id: int, status: Any, *, today: Optional[date] = None
    ) -> Task:
        today = today or now_local().date()
        new_status = parse_enum(TaskStatus, status, "status")
        if new_status == TaskStatus.OVERDUE:
            raise ValidationError("overdue is derived from the due date and cannot be set")

        task = self._accessible(caller, task_id)
        self._tasks.update_status(
            task_id=task.id,
            status=new_status,
            completed_date=today if new_status == TaskStatus.COMPLETED else None,
        )
        return self.get_task(caller, task.id, today=today)

    def add_comment(self, caller: CallerContext, task_id: int, comment: Any) -> TaskComment:
        text = require_non_empty(comment, "comment")
        task = self._accessible(caller, task_id)
        comment_id = self._tasks.add_comment(task_id=task.id, user_id=caller.user_id, comment=text)
        return TaskComment(
            id=comment_id, task_id=task.id, user_id=caller.user_id, comment=text, user_name=caller.user.name
        )

    def stats(self, caller: CallerContext, *, today: Optional[date] = None) -> dict[str, int]:
        tasks = self.list_tasks(caller, today=today)
        counts = {s.value: 0 for s in TaskStatus}
        for t in tasks:
            counts[t.status.value] += 1
        counts["total"] = len(tasks)
        return counts

    def _accessible(self, caller: CallerContext, task_id: int) -> Task:
        task = self._tasks.get_by_id(int(task_id))
        if not task:
            raise NotFoundError("Task not found")

        scope = scope_for(caller)
        if scope.is_global:
            return task
        if scope.manager_id is not None and (
            task.assigned_by == scope.manager_id or (task.department and task.department == scope.department)
        ):
            return task

        assignee = self._employees.get_by_id(task.assigned_to)
        if assignee is None or not scope.covers(assignee):
            raise AuthorizationError("Access denied")
        return task
