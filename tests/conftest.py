from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hrm_system.hrm_system.access.scope import CallerContext, Scope
from src.hrm_system.hrm_system.assets.model import Asset, AssetData
from src.hrm_system.hrm_system.attendance.day_state import ALREADY_CHECKED_IN
from src.hrm_system.hrm_system.attendance.model import TimeEntry
from src.hrm_system.hrm_system.auth.model import User
from src.hrm_system.hrm_system.auth.tokens import TokenCodec
from src.hrm_system.hrm_system.container import Container, assemble
from src.hrm_system.hrm_system.core.enums import (
    AssetStatus,
    AttendanceStatus,
    EmployeeStatus,
    LeaveType,
    ReportStatus,
    RequestStatus,
    Role,
    TaskStatus,
    WorkType,
)
from src.hrm_system.hrm_system.core.exceptions import ConflictError
from src.hrm_system.hrm_system.employees.model import Employee, EmployeeData
from src.hrm_system.hrm_system.leaves.model import LeaveRequest
from src.hrm_system.hrm_system.reports.model import NewWorkReport, WorkReport
from src.hrm_system.hrm_system.tasks.model import NewTask, Task, TaskComment

PASSWORD = "123456"
PASSWORD_HASH = generate_password_hash(PASSWORD)
CREATED = datetime(2024, 12, 1, 8, 0, 0)


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.by_id = {u.id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self.rows = {e.id: e for e in employees}
        self._next_id = max(self.rows, default=0) + 1

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.rows.get(employee_id)

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return next((e for e in self.rows.values() if e.user_id == user_id), None)

    def list_employees(self, *, scope: Scope, department=None, status=None, search=None):
        rows = [e for e in self.rows.values() if scope.covers(e)]
        if department:
            rows = [e for e in rows if e.department == department]
        if status:
            rows = [e for e in rows if e.status == status]
        if search:
            rows = [e for e in rows if search in e.name or search in e.employee_code or search in e.email]
        return sorted(rows, key=lambda e: e.id, reverse=True)

    def _check_unique(self, data: EmployeeData, employee_id: Optional[int] = None) -> None:
        for e in self.rows.values():
            if e.id != employee_id and (e.employee_code == data.employee_code or e.email == data.email):
                raise ConflictError("Employee code or email already exists")

    def create(self, data: EmployeeData) -> int:
        self._check_unique(data)
        employee_id = self._next_id
        self._next_id += 1
        self.rows[employee_id] = Employee(id=employee_id, **data.__dict__)
        return employee_id

    def update(self, employee_id: int, data: EmployeeData) -> bool:
        if employee_id not in self.rows:
            return False
        self._check_unique(data, employee_id)
        self.rows[employee_id] = Employee(id=employee_id, **data.__dict__)
        return True

    def delete(self, employee_id: int) -> bool:
        return self.rows.pop(employee_id, None) is not None


class InMemoryTimeEntries:
    """Mirrors the unique (employee_id, work_date) index of the real table."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[tuple[int, date], TimeEntry] = {}
        self._next_id = 1

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[TimeEntry]:
        return self.rows.get((employee_id, work_date))

    def create_check_in(self, *, employee_id, work_date, check_in, status, location=None, work_type=WorkType.OFFICE):
        if (employee_id, work_date) in self.rows:
            raise ConflictError(ALREADY_CHECKED_IN)
        entry_id = self._next_id
        self._next_id += 1
        self.rows[(employee_id, work_date)] = TimeEntry(
            id=entry_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
            location=location,
            work_type=work_type,
        )
        return entry_id

    def close_entry(self, *, entry_id, check_out, status, overtime_hours) -> bool:
        for key, entry in self.rows.items():
            if entry.id == entry_id and entry.check_out is None:
                self.rows[key] = replace(entry, check_out=check_out, status=status, overtime_hours=overtime_hours)
                return True
        return False

    def list_entries(self, *, scope, employee_id=None, start_date=None, end_date=None):
        rows = [e for e in self.rows.values() if scope.covers(self._employees.rows[e.employee_id])]
        if employee_id is not None:
            rows = [e for e in rows if e.employee_id == employee_id]
        if start_date is not None:
            rows = [e for e in rows if e.work_date >= start_date]
        if end_date is not None:
            rows = [e for e in rows if e.work_date <= end_date]
        return sorted(rows, key=lambda e: (e.work_date, e.check_in), reverse=True)

    def seed(self, employee_id: int, work_date: date, check_in: time, check_out: Optional[time] = None,
             status: AttendanceStatus = AttendanceStatus.ON_TIME, overtime_hours: float = 0.0) -> None:
        entry_id = self.create_check_in(employee_id=employee_id, work_date=work_date, check_in=check_in, status=status)
        if check_out is not None:
            self.close_entry(entry_id=entry_id, check_out=check_out, status=status, overtime_hours=overtime_hours)


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def create(self, *, employee_id, leave_type, start_date, end_date, days, reason) -> int:
        request_id = self._next_id
        self._next_id += 1
        self.rows[request_id] = LeaveRequest(
            id=request_id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
            status=RequestStatus.PENDING,
            employee_name=self._employees.rows[employee_id].name,
            created_at=datetime(2024, 12, 1, 8, 0, 0).replace(minute=request_id % 60),
        )
        return request_id

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.rows.get(request_id)

    def list_requests(self, *, scope, employee_id=None, status=None, leave_type=None):
        rows = [r for r in self.rows.values() if scope.covers(self._employees.rows[r.employee_id])]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == employee_id]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if leave_type is not None:
            rows = [r for r in rows if r.leave_type == leave_type]
        return sorted(rows, key=lambda r: r.id, reverse=True)

    def decide(self, *, request_id, status, approved_by) -> bool:
        current = self.rows.get(request_id)
        if current is None or current.status != RequestStatus.PENDING:
            return False
        self.rows[request_id] = replace(current, status=status, approved_by=approved_by)
        return True

    def seed_approved(self, employee_id: int, leave_type: LeaveType, start: date, end: date) -> int:
        request_id = self.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            days=(end - start).days + 1,
            reason=None,
        )
        self.decide(request_id=request_id, status=RequestStatus.APPROVED, approved_by=2)
        return request_id


class InMemoryTasks:
    def __init__(self, employees: InMemoryEmployees, users: InMemoryUsers):
        self._employees = employees
        self._users = users
        self.rows: dict[int, Task] = {}
        self.comments: list[TaskComment] = []
        self._next_id = 1

    def create(self, data: NewTask) -> int:
        task_id = self._next_id
        self._next_id += 1
        self.rows[task_id] = Task(
            id=task_id,
            title=data.title,
            description=data.description,
            assigned_to=data.assigned_to,
            assigned_by=data.assigned_by,
            department=data.department,
            priority=data.priority,
            status=TaskStatus.NOT_STARTED,
            due_date=data.due_date,
            attachments=data.attachments,
            created_at=CREATED,
        )
        return task_id

    def _with_comments(self, task: Task) -> Task:
        return replace(task, comments=tuple(c for c in reversed(self.comments) if c.task_id == task.id))

    def get_by_id(self, task_id: int) -> Optional[Task]:
        task = self.rows.get(task_id)
        return self._with_comments(task) if task else None

    def list_tasks(self, *, scope, priority=None, assigned_to=None):
        def visible(t: Task) -> bool:
            if scope.manager_id is not None and (t.assigned_by == scope.manager_id or t.department == scope.department):
                return True
            return scope.covers(self._employees.rows[t.assigned_to])

        rows = [t for t in self.rows.values() if visible(t)]
        if priority is not None:
            rows = [t for t in rows if t.priority == priority]
        if assigned_to is not None:
            rows = [t for t in rows if t.assigned_to == assigned_to]
        return [self._with_comments(t) for t in sorted(rows, key=lambda t: t.id, reverse=True)]

    def update_progress(self, *, task_id, progress, status, completed_date) -> bool:
        if task_id not in self.rows:
            return False
        self.rows[task_id] = replace(self.rows[task_id], progress=progress, status=status, completed_date=completed_date)
        return True

    def update_status(self, *, task_id, status, completed_date) -> bool:
        if task_id not in self.rows:
            return False
        self.rows[task_id] = replace(self.rows[task_id], status=status, completed_date=completed_date)
        return True

    def add_comment(self, *, task_id, user_id, comment) -> int:
        comment_id = len(self.comments) + 1
        self.comments.append(
            TaskComment(id=comment_id, task_id=task_id, user_id=user_id, comment=comment,
                        user_name=self._users.by_id[user_id].name)
        )
        return comment_id


class InMemoryAssets:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[int, Asset] = {}
        self._next_id = 1

    def _check_serial(self, data: AssetData, asset_id: Optional[int] = None) -> None:
        if data.serial_number and any(
            a.serial_number == data.serial_number and a.id != asset_id for a in self.rows.values()
        ):
            raise ConflictError("Serial number already exists")

    def get_by_id(self, asset_id: int) -> Optional[Asset]:
        return self.rows.get(asset_id)

    def list_assets(self, *, scope, status=None, asset_type=None, search=None):
        def visible(a: Asset) -> bool:
            if scope.is_global:
                return True
            return a.assigned_to is not None and scope.covers(self._employees.rows[a.assigned_to])

        rows = [a for a in self.rows.values() if visible(a)]
        if status is not None:
            rows = [a for a in rows if a.status == status]
        if asset_type is not None:
            rows = [a for a in rows if a.asset_type == asset_type]
        if search:
            rows = [a for a in rows if search in a.name or search in (a.serial_number or "")]
        return sorted(rows, key=lambda a: a.id, reverse=True)

    def create(self, data: AssetData) -> int:
        self._check_serial(data)
        asset_id = self._next_id
        self._next_id += 1
        self.rows[asset_id] = Asset(id=asset_id, **data.__dict__)
        return asset_id

    def update(self, asset_id: int, data: AssetData) -> bool:
        if asset_id not in self.rows:
            return False
        self._check_serial(data, asset_id)
        self.rows[asset_id] = replace(self.rows[asset_id], **data.__dict__)
        return True

    def assign(self, *, asset_id, employee_id, assigned_date) -> bool:
        asset = self.rows.get(asset_id)
        if asset is None or asset.status != AssetStatus.AVAILABLE:
            return False
        self.rows[asset_id] = replace(
            asset, assigned_to=employee_id, assigned_date=assigned_date, status=AssetStatus.ASSIGNED,
            assigned_to_name=self._employees.rows[employee_id].name,
        )
        return True

    def release(self, asset_id: int) -> bool:
        asset = self.rows.get(asset_id)
        if asset is None or asset.status != AssetStatus.ASSIGNED:
            return False
        self.rows[asset_id] = replace(
            asset, assigned_to=None, assigned_date=None, status=AssetStatus.AVAILABLE, assigned_to_name=None
        )
        return True


class InMemoryReports:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.rows: dict[int, WorkReport] = {}
        self._next_id = 1

    def create(self, data: NewWorkReport) -> int:
        report_id = self._next_id
        self._next_id += 1
        self.rows[report_id] = WorkReport(
            id=report_id,
            employee_id=data.employee_id,
            task_id=data.task_id,
            title=data.title,
            description=data.description,
            report_type=data.report_type,
            work_date=data.work_date,
            hours_spent=data.hours_spent,
            status=data.status,
            employee_name=self._employees.rows[data.employee_id].name,
            created_at=datetime(2024, 12, 2, 8, 0, 0).replace(minute=report_id % 60),
        )
        return report_id

    def get_by_id(self, report_id: int) -> Optional[WorkReport]:
        return self.rows.get(report_id)

    def list_reports(self, *, scope, employee_id=None, status=None, report_type=None, start_date=None, end_date=None):
        rows = [r for r in self.rows.values() if scope.covers(self._employees.rows[r.employee_id])]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == employee_id]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if report_type is not None:
            rows = [r for r in rows if r.report_type == report_type]
        if start_date is not None:
            rows = [r for r in rows if r.work_date >= start_date]
        if end_date is not None:
            rows = [r for r in rows if r.work_date <= end_date]
        return sorted(rows, key=lambda r: r.id, reverse=True)

    def decide(self, *, report_id, status, approved_by, feedback) -> bool:
        current = self.rows.get(report_id)
        if current is None or current.status != ReportStatus.SUBMITTED:
            return False
        self.rows[report_id] = replace(current, status=status, approved_by=approved_by, feedback=feedback)
        return True


@dataclass
class Demo:
    """A small company: admin, hr, a development manager with one report,
    a colleague in Sales and an employee-role account without a profile."""

    container: Container
    users: InMemoryUsers
    employees: InMemoryEmployees
    entries: InMemoryTimeEntries
    leaves: InMemoryLeaves
    tasks: InMemoryTasks
    assets: InMemoryAssets
    reports: InMemoryReports
    tokens: TokenCodec

    def caller(self, email_prefix: str) -> CallerContext:
        user = self.users.get_by_email(f"{email_prefix}@company.com")
        return CallerContext(user=user, employee=self.employees.get_by_user_id(user.id))

    def employee_of(self, email_prefix: str) -> Employee:
        return self.caller(email_prefix).employee

    def auth_header(self, email_prefix: str) -> dict[str, str]:
        user = self.users.get_by_email(f"{email_prefix}@company.com")
        return {"Authorization": f"Bearer {self.tokens.issue(user)}"}


def _user(user_id: int, prefix: str, name: str, role: Role) -> User:
    return User(id=user_id, email=f"{prefix}@company.com", password_hash=PASSWORD_HASH, name=name, role=role)


def build_demo() -> Demo:
    users = InMemoryUsers(
        [
            _user(1, "admin", "Admin User", Role.ADMIN),
            _user(2, "hr", "HR Manager", Role.HR),
            _user(3, "manager", "Development Manager", Role.MANAGER),
            _user(4, "employee", "John Doe", Role.EMPLOYEE),
            _user(5, "sales", "Jane Roe", Role.EMPLOYEE),
            _user(6, "orphan", "No Profile", Role.EMPLOYEE),
        ]
    )
    employees = InMemoryEmployees(
        [
            Employee(id=1, employee_code="EMP001", name="Admin User", email="admin@company.com", user_id=1,
                     department="Administration"),
            Employee(id=2, employee_code="EMP002", name="HR Manager", email="hr@company.com", user_id=2,
                     department="Human Resources"),
            Employee(id=3, employee_code="EMP003", name="Development Manager", email="manager@company.com",
                     user_id=3, department="Development"),
            Employee(id=4, employee_code="EMP004", name="John Doe", email="employee@company.com", user_id=4,
                     department="Development", manager_id=3),
            Employee(id=5, employee_code="EMP005", name="Jane Roe", email="sales@company.com", user_id=5,
                     department="Sales", status=EmployeeStatus.PROBATION),
        ]
    )
    entries = InMemoryTimeEntries(employees)
    leaves = InMemoryLeaves(employees)
    tasks = InMemoryTasks(employees, users)
    assets = InMemoryAssets(employees)
    reports = InMemoryReports(employees)
    tokens = TokenCodec(secret_key="test-secret", expire_minutes=60)

    container = assemble(
        users_repo=users,
        employees_repo=employees,
        time_entries_repo=entries,
        leaves_repo=leaves,
        tasks_repo=tasks,
        assets_repo=assets,
        reports_repo=reports,
        token_codec=tokens,
    )
    return Demo(
        container=container,
        users=users,
        employees=employees,
        entries=entries,
        leaves=leaves,
        tasks=tasks,
        assets=assets,
        reports=reports,
        tokens=tokens,
    )


@pytest.fixture()
def demo() -> Demo:
    return build_demo()


@pytest.fixture()
def client(demo: Demo):
    from src.hrm_system.hrm_system.main import create_app

    app = create_app(settings_module="config.testing", container=demo.container)
    return app.test_client()
