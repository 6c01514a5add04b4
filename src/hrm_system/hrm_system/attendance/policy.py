from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import hours_between
from ..core.constants import DEFAULT_WORK_END, DEFAULT_WORK_START
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendancePolicy:
    """Working-day thresholds, injected from settings at startup."""

    work_start: time = DEFAULT_WORK_START
    work_end: time = DEFAULT_WORK_END
    flag_early_leave: bool = False

    def check_in_status(self, at: time) -> AttendanceStatus:
        # Exactly on the threshold is still on time.
        return AttendanceStatus.LATE if at > self.work_start else AttendanceStatus.ON_TIME

    def overtime_hours(self, at: time) -> float:
        return round(hours_between(self.work_end, at), 2)

    def check_out_status(self, at: time, current: AttendanceStatus) -> AttendanceStatus:
        if self.flag_early_leave and current == AttendanceStatus.ON_TIME and at < self.work_end:
            return AttendanceStatus.EARLY_LEAVE
        return current
