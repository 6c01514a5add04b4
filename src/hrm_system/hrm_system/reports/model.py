from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ReportStatus, ReportType


@dataclass(frozen=True)
class WorkReport:
    id: int
    employee_id: int
    title: str
    report_type: ReportType
    work_date: date
    hours_spent: float
    status: ReportStatus
    task_id: Optional[int] = None
    description: Optional[str] = None
    approved_by: Optional[int] = None
    feedback: Optional[str] = None
    employee_name: Optional[str] = None
    task_title: Optional[str] = None
    approved_by_name: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewWorkReport:
    employee_id: int
    task_id: Optional[int]
    title: str
    description: Optional[str]
    report_type: ReportType
    work_date: date
    hours_spent: float
    status: ReportStatus
