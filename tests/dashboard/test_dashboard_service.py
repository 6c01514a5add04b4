from __future__ import annotations

from datetime import date, datetime, time

from src.hrm_system.hrm_system.core.enums import LeaveType

TODAY = date(2024, 12, 4)  # Wednesday


def test_back_office_stats(demo):
    demo.entries.seed(4, TODAY, time(9, 0))
    demo.entries.seed(5, TODAY, time(9, 5))
    demo.entries.seed(4, date(2024, 12, 3), time(9, 0), time(18, 0))
    demo.container.leave_service.request_leave(
        demo.caller("employee"), leave_type="annual", start_date="2024-12-20", end_date="2024-12-20"
    )
    demo.container.task_service.create_task(demo.caller("manager"), {"title": "T", "assigned_to": 4})
    demo.container.asset_service.create_asset(demo.caller("hr"), {"name": "Chair", "type": "furniture"})

    stats = demo.container.dashboard_service.stats(demo.caller("hr"), today=TODAY)
    assert stats == {
        "total_employees": 5,
        "active_employees": 4,
        "probation_employees": 1,
        "pending_leaves": 1,
        "open_tasks": 1,
        "total_assets": 1,
        "available_assets": 1,
        "today_attendance": 2,
    }


def test_manager_stats(demo):
    leaves = demo.container.leave_service
    leaves.request_leave(demo.caller("employee"), leave_type="annual", start_date="2024-12-20", end_date="2024-12-20")
    leaves.request_leave(demo.caller("manager"), leave_type="annual", start_date="2024-12-20", end_date="2024-12-20")
    leaves.request_leave(demo.caller("sales"), leave_type="annual", start_date="2024-12-20", end_date="2024-12-20")
    demo.container.task_service.create_task(demo.caller("manager"), {"title": "T", "assigned_to": 4})

    stats = demo.container.dashboard_service.stats(demo.caller("manager"), today=TODAY)
    assert stats == {"team_members": 1, "pending_approvals": 1, "active_projects": 1}


def test_employee_stats(demo):
    demo.leaves.seed_approved(4, LeaveType.ANNUAL, date(2024, 12, 25), date(2024, 12, 27))
    demo.entries.seed(4, date(2024, 12, 2), time(9, 0), time(18, 0))
    demo.entries.seed(4, date(2024, 12, 3), time(9, 0), time(17, 30))
    demo.entries.seed(4, TODAY, time(9, 0))
    demo.entries.seed(4, date(2024, 11, 29), time(9, 0), time(18, 0))
    demo.container.task_service.create_task(demo.caller("manager"), {"title": "T", "assigned_to": 4})

    stats = demo.container.dashboard_service.stats(demo.caller("employee"), today=TODAY)
    assert stats == {"active_tasks": 1, "remaining_leaves": 12, "weekly_hours": 17.5}


def test_recent_activities_newest_first_and_limited(demo):
    leaves = demo.container.leave_service
    for _ in range(7):
        leaves.request_leave(demo.caller("employee"), leave_type="sick", start_date="2024-12-20", end_date="2024-12-20")
    for _ in range(5):
        demo.container.report_service.submit(demo.caller("employee"), {"title": "Daily", "hours_spent": 8})
    demo.container.report_service.save_draft(demo.caller("employee"), {"title": "Draft", "hours_spent": 1})

    items = demo.container.dashboard_service.recent_activities(demo.caller("manager"))
    assert len(items) == 10
    assert [i.type for i in items[:5]] == ["work_report"] * 5
    stamps = [i.created_at for i in items]
    assert stamps == sorted(stamps, reverse=True)
    assert all(isinstance(s, datetime) for s in stamps)


def test_recent_activities_are_scoped(demo):
    demo.container.leave_service.request_leave(
        demo.caller("sales"), leave_type="sick", start_date="2024-12-20", end_date="2024-12-20"
    )
    assert demo.container.dashboard_service.recent_activities(demo.caller("manager")) == []
    assert len(demo.container.dashboard_service.recent_activities(demo.caller("hr"))) == 1
