from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import TaskPriority, TaskStatus
from .model import NewTask, Task


class TaskRepository(Protocol):
    def create(self, data: NewTask) -> int:
        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_tasks(
        self,
        *,
        scope: Scope,
        priority: Optional[TaskPriority] = None,
        assigned_to: Optional[int] = None,
    ) -> Sequence[Task]:
        """Tasks with their comments, newest first.

        A manager scope also covers the tasks the manager assigned.
        """

        raise NotImplementedError

    def update_progress(
        self, *, task_id: int, progress: int, status: TaskStatus, completed_date: Optional[date]
    ) -> bool:
        raise NotImplementedError

    def update_status(self, *, task_id: int, status: TaskStatus, completed_date: Optional[date]) -> bool:
        raise NotImplementedError

    def add_comment(self, *, task_id: int, user_id: int, comment: str) -> int:
        raise NotImplementedError
