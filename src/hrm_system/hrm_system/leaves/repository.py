from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..access.scope import Scope
from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        scope: Scope,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        leave_type: Optional[LeaveType] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def decide(self, *, request_id: int, status: RequestStatus, approved_by: int) -> bool:
        """Only a pending request can be decided; False otherwise."""

        raise NotImplementedError
