from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import ReportStatus, ReportType
from .model import NewWorkReport, WorkReport


class WorkReportRepository(Protocol):
    def create(self, data: NewWorkReport) -> int:
        raise NotImplementedError

    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        raise NotImplementedError

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
        raise NotImplementedError

    def decide(
        self, *, report_id: int, status: ReportStatus, approved_by: int, feedback: Optional[str]
    ) -> bool:
        """Only a submitted report can be decided; False otherwise."""

        raise NotImplementedError
