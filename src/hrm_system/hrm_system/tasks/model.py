from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskComment:
    id: int
    task_id: int
    user_id: int
    comment: str
    user_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: Optional[str]
    assigned_to: int
    assigned_by: int
    department: Optional[str]
    priority: TaskPriority
    status: TaskStatus
    progress: int = 0
    due_date: Optional[date] = None
    completed_date: Optional[date] = None
    attachments: tuple[str, ...] = ()
    assigned_to_name: Optional[str] = None
    assigned_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    comments: tuple[TaskComment, ...] = ()

    def effective_status(self, today: date) -> TaskStatus:
        """Stored status, or `overdue` once the due date has passed unfinished."""
        if self.status != TaskStatus.COMPLETED and self.due_date is not None and today > self.due_date:
            return TaskStatus.OVERDUE
        return self.status


@dataclass(frozen=True)
class NewTask:
    title: str
    description: Optional[str]
    assigned_to: int
    assigned_by: int
    department: Optional[str]
    priority: TaskPriority
    due_date: Optional[date]
    attachments: tuple[str, ...] = ()
