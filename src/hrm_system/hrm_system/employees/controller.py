from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def list_employees(caller):
        employees = service.list_employees(
            caller,
            department=request.args.get("department"),
            status=request.args.get("status"),
            search=request.args.get("search"),
        )
        return jsonify(to_json(list(employees)))

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int, caller):
        return jsonify(to_json(service.get_employee(caller, employee_id)))

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @login_required
    def create_employee(caller):
        employee_id = service.create_employee(caller, request.get_json(silent=True) or {})
        return jsonify({"message": "Employee created", "id": employee_id}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @login_required
    def update_employee(employee_id: int, caller):
        employee = service.update_employee(caller, employee_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Employee updated", "employee": to_json(employee)})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @login_required
    def delete_employee(employee_id: int, caller):
        service.delete_employee(caller, employee_id)
        return jsonify({"message": "Employee deleted"})
