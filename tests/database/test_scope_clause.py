from __future__ import annotations

from src.hrm_system.hrm_system.access.scope import GLOBAL_SCOPE, Scope
from src.hrm_system.hrm_system.database.mysql_base import scope_clause
from src.hrm_system.hrm_system.tasks.mysql_task_repository import task_scope_clause

COLUMNS = {"employee_col": "e.id", "department_col": "e.department", "manager_col": "e.manager_id"}


def test_employee_scope_is_own_rows_only():
    sql, params = scope_clause(Scope(employee_id=4), **COLUMNS)
    assert sql == "e.id=%s"
    assert params == [4]


def test_manager_scope_covers_department_reports_and_self():
    sql, params = scope_clause(Scope(manager_id=3, department="Development"), **COLUMNS)
    assert sql == "(e.department=%s OR e.manager_id=%s OR e.id=%s)"
    assert params == ["Development", 3, 3]


def test_manager_without_department():
    # `department = NULL` never matches, so only reports and self remain
    sql, params = scope_clause(Scope(manager_id=3), **COLUMNS)
    assert sql == "(e.department=%s OR e.manager_id=%s OR e.id=%s)"
    assert params == [None, 3, 3]


def test_global_scope_has_no_filter():
    assert scope_clause(GLOBAL_SCOPE, **COLUMNS) == ("1=1", [])


def test_task_scope_adds_assigned_by_for_managers():
    sql, params = task_scope_clause(Scope(manager_id=3, department="Development"))
    assert sql == "((t.department=%s OR e1.manager_id=%s OR t.assigned_to=%s) OR t.assigned_by=%s)"
    assert params == ["Development", 3, 3, 3]


def test_task_scope_for_employee_and_global():
    assert task_scope_clause(Scope(employee_id=4)) == ("t.assigned_to=%s", [4])
    assert task_scope_clause(GLOBAL_SCOPE) == ("1=1", [])


def test_params_are_not_shared_between_calls():
    first = task_scope_clause(Scope(manager_id=3, department="Development"))[1]
    first.append("extra")
    assert task_scope_clause(Scope(manager_id=3, department="Development"))[1] == ["Development", 3, 3, 3]
