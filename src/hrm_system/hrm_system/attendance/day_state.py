"""Per-employee, per-day attendance state.

NoEntry --check_in--> Open --check_out--> Closed

Transitions are pure functions so they can be exercised without a database.
Nothing leaves Closed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, ValidationError
from .model import TimeEntry
from .policy import AttendancePolicy

ALREADY_CHECKED_IN = "Already checked in today"
NOT_CHECKED_IN = "Not checked in or already checked out"


@dataclass(frozen=True)
class NoEntry:
    pass


@dataclass(frozen=True)
class Open:
    check_in: time
    status: AttendanceStatus


@dataclass(frozen=True)
class Closed:
    check_in: time
    check_out: time
    status: AttendanceStatus
    overtime_hours: float


DayState = Union[NoEntry, Open, Closed]


def state_of(entry: Optional[TimeEntry]) -> DayState:
    if entry is None:
        return NoEntry()
    if entry.check_out is None:
        return Open(check_in=entry.check_in, status=entry.status)
    return Closed(
        check_in=entry.check_in,
        check_out=entry.check_out,
        status=entry.status,
        overtime_hours=entry.overtime_hours,
    )


def check_in(state: DayState, at: time, policy: AttendancePolicy) -> Open:
    if not isinstance(state, NoEntry):
        raise ConflictError(ALREADY_CHECKED_IN)
    return Open(check_in=at, status=policy.check_in_status(at))


def check_out(state: DayState, at: time, policy: AttendancePolicy) -> Closed:
    if not isinstance(state, Open):
        raise ValidationError(NOT_CHECKED_IN)
    return Closed(
        check_in=state.check_in,
        check_out=at,
        status=policy.check_out_status(at, state.status),
        overtime_hours=policy.overtime_hours(at),
    )
