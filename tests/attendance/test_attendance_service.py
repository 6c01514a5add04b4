from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.hrm_system.hrm_system.core.enums import AttendanceStatus, WorkType
from src.hrm_system.hrm_system.core.exceptions import (
    ConflictError,
    EmployeeProfileNotFound,
    ValidationError,
)


def test_check_in_late_then_check_out_with_overtime(demo):
    svc = demo.container.attendance_service
    caller = demo.caller("employee")

    entry = svc.check_in(caller, location="HQ", work_type="wfh", now=datetime(2024, 12, 2, 9, 0, 1))
    assert entry.status == AttendanceStatus.LATE
    assert entry.work_type == WorkType.WFH
    assert entry.check_out is None

    closed = svc.check_out(caller, now=datetime(2024, 12, 2, 18, 30))
    assert closed.check_out == time(18, 30)
    assert closed.overtime_hours == 0.5
    assert closed.status == AttendanceStatus.LATE
    assert closed.location == "HQ"


def test_one_entry_per_employee_per_day(demo):
    svc = demo.container.attendance_service
    caller = demo.caller("employee")

    svc.check_in(caller, now=datetime(2024, 12, 2, 8, 50))
    with pytest.raises(ConflictError):
        svc.check_in(caller, now=datetime(2024, 12, 2, 13, 0))

    assert len(demo.entries.rows) == 1
    svc.check_in(caller, now=datetime(2024, 12, 3, 8, 50))
    assert len(demo.entries.rows) == 2


def test_check_out_without_check_in(demo):
    with pytest.raises(ValidationError, match="Not checked in or already checked out"):
        demo.container.attendance_service.check_out(demo.caller("employee"), now=datetime(2024, 12, 2, 18, 0))


def test_check_out_twice(demo):
    svc = demo.container.attendance_service
    caller = demo.caller("employee")
    svc.check_in(caller, now=datetime(2024, 12, 2, 9, 0))
    svc.check_out(caller, now=datetime(2024, 12, 2, 18, 0))

    with pytest.raises(ValidationError):
        svc.check_out(caller, now=datetime(2024, 12, 2, 19, 0))


def test_invalid_work_type(demo):
    with pytest.raises(ValidationError, match="type must be one of"):
        demo.container.attendance_service.check_in(
            demo.caller("employee"), work_type="beach", now=datetime(2024, 12, 2, 9, 0)
        )


def test_caller_without_profile(demo):
    with pytest.raises(EmployeeProfileNotFound):
        demo.container.attendance_service.check_in(demo.caller("orphan"), now=datetime(2024, 12, 2, 9, 0))


def test_history_is_scoped_by_role(demo):
    demo.entries.seed(4, date(2024, 12, 2), time(8, 55), time(18, 0))
    demo.entries.seed(5, date(2024, 12, 2), time(9, 10), time(18, 0), status=AttendanceStatus.LATE)
    demo.entries.seed(3, date(2024, 12, 2), time(8, 30), time(19, 0), overtime_hours=1.0)
    svc = demo.container.attendance_service

    assert {e.employee_id for e in svc.history(demo.caller("employee"))} == {4}
    assert {e.employee_id for e in svc.history(demo.caller("manager"))} == {3, 4}
    assert {e.employee_id for e in svc.history(demo.caller("hr"))} == {3, 4, 5}


def test_employee_filter_cannot_widen_scope(demo):
    demo.entries.seed(5, date(2024, 12, 2), time(9, 0), time(18, 0))
    assert list(demo.container.attendance_service.history(demo.caller("employee"), employee_id=5)) == []


def test_history_date_range(demo):
    demo.entries.seed(4, date(2024, 12, 2), time(9, 0), time(18, 0))
    demo.entries.seed(4, date(2024, 12, 9), time(9, 0), time(18, 0))
    svc = demo.container.attendance_service

    rows = svc.history(demo.caller("employee"), start_date=date(2024, 12, 5), end_date=date(2024, 12, 31))
    assert [e.work_date for e in rows] == [date(2024, 12, 9)]

    with pytest.raises(ValidationError):
        svc.history(demo.caller("employee"), start_date=date(2024, 12, 9), end_date=date(2024, 12, 1))


def test_monthly_stats(demo):
    demo.entries.seed(4, date(2024, 12, 2), time(9, 0), time(18, 0))
    demo.entries.seed(4, date(2024, 12, 3), time(9, 15), time(19, 0), status=AttendanceStatus.LATE, overtime_hours=1.0)
    demo.entries.seed(4, date(2024, 12, 4), time(8, 45))
    demo.entries.seed(4, date(2024, 11, 29), time(9, 0), time(18, 0))

    stats = demo.container.attendance_service.stats(demo.caller("employee"), month=12, year=2024)
    assert stats.total_days == 3
    assert stats.on_time_days == 2
    assert stats.late_days == 1
    assert stats.total_overtime == 1.0
    # open days are left out of the average
    assert stats.avg_hours_per_day == pytest.approx(9.38, abs=0.01)


def test_stats_rejects_bad_month(demo):
    with pytest.raises(ValidationError):
        demo.container.attendance_service.stats(demo.caller("employee"), month=13, year=2024)


def test_stats_month_zero_is_rejected(demo):
    with pytest.raises(ValidationError, match="month"):
        demo.container.attendance_service.stats(demo.caller("employee"), month=0, year=2024)


@pytest.mark.parametrize("year", [0, -5, 10000])
def test_stats_year_out_of_range(demo, year):
    with pytest.raises(ValidationError, match="year must be between"):
        demo.container.attendance_service.stats(demo.caller("employee"), month=1, year=year)
