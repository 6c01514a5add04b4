from __future__ import annotations

import pytest

from src.hrm_system.hrm_system.core.enums import EmployeeStatus
from src.hrm_system.hrm_system.core.exceptions import (
    AuthorizationError,
    ConflictError,
    EmployeeProfileNotFound,
    NotFoundError,
    ValidationError,
)

NEW_HIRE = {
    "employee_code": "EMP010",
    "name": "Mary Major",
    "email": "mary@company.com",
    "department": "Development",
    "position": "QA Engineer",
    "manager_id": 3,
    "join_date": "2024-12-01",
    "salary": 1500,
    "status": "probation",
    "skills": ["pytest", " selenium ", ""],
}


def test_list_is_scoped(demo):
    svc = demo.container.employee_service
    assert [e.id for e in svc.list_employees(demo.caller("employee"))] == [4]
    assert {e.id for e in svc.list_employees(demo.caller("manager"))} == {3, 4}
    assert len(svc.list_employees(demo.caller("admin"))) == 5


def test_list_filters(demo):
    svc = demo.container.employee_service
    assert [e.id for e in svc.list_employees(demo.caller("hr"), department="Sales")] == [5]
    assert [e.id for e in svc.list_employees(demo.caller("hr"), status="probation")] == [5]
    assert [e.id for e in svc.list_employees(demo.caller("hr"), search="EMP004")] == [4]
    assert len(svc.list_employees(demo.caller("hr"), department="all", status="all")) == 5
    with pytest.raises(ValidationError):
        svc.list_employees(demo.caller("hr"), status="retired")


def test_missing_profile_is_not_found(demo):
    with pytest.raises(EmployeeProfileNotFound) as exc:
        demo.container.employee_service.list_employees(demo.caller("orphan"))
    assert exc.value.status_code == 404


def test_get_employee_scope(demo):
    svc = demo.container.employee_service
    assert svc.get_employee(demo.caller("manager"), 4).name == "John Doe"
    with pytest.raises(AuthorizationError):
        svc.get_employee(demo.caller("employee"), 5)
    with pytest.raises(NotFoundError):
        svc.get_employee(demo.caller("hr"), 999)


def test_create_employee(demo):
    employee_id = demo.container.employee_service.create_employee(demo.caller("hr"), NEW_HIRE)
    created = demo.employees.get_by_id(employee_id)
    assert created.status == EmployeeStatus.PROBATION
    assert created.skills == ("pytest", "selenium")
    assert created.salary == 1500.0


def test_create_rules(demo):
    svc = demo.container.employee_service
    with pytest.raises(AuthorizationError):
        svc.create_employee(demo.caller("manager"), NEW_HIRE)
    with pytest.raises(ValidationError, match="name is required"):
        svc.create_employee(demo.caller("hr"), {**NEW_HIRE, "name": ""})
    with pytest.raises(ValidationError, match="Manager does not exist"):
        svc.create_employee(demo.caller("hr"), {**NEW_HIRE, "manager_id": 999})
    with pytest.raises(ConflictError):
        svc.create_employee(demo.caller("hr"), {**NEW_HIRE, "employee_code": "EMP004"})


def test_update_keeps_unsent_fields(demo):
    updated = demo.container.employee_service.update_employee(
        demo.caller("admin"), 4, {"position": "Senior Developer", "kpi": 92.5}
    )
    assert updated.position == "Senior Developer"
    assert updated.kpi == 92.5
    assert updated.email == "employee@company.com"
    assert updated.manager_id == 3
    assert updated.user_id == 4


def test_update_rejects_self_management(demo):
    with pytest.raises(ValidationError, match="own manager"):
        demo.container.employee_service.update_employee(demo.caller("admin"), 4, {"manager_id": 4})


def test_delete(demo):
    svc = demo.container.employee_service
    svc.delete_employee(demo.caller("hr"), 5)
    assert demo.employees.get_by_id(5) is None

    with pytest.raises(NotFoundError):
        svc.delete_employee(demo.caller("hr"), 5)
    with pytest.raises(ValidationError):
        svc.delete_employee(demo.caller("hr"), 2)
