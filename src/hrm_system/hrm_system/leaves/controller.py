from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..common.validators import parse_optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.leave_service

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_list")
    @login_required
    def list_leaves(caller):
        requests = service.list_requests(
            caller,
            status=request.args.get("status"),
            leave_type=request.args.get("type"),
            employee_id=parse_optional_int(request.args.get("employeeId"), "employeeId"),
        )
        return jsonify(to_json(list(requests)))

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_create")
    @login_required
    def create_leave(caller):
        body = request.get_json(silent=True) or {}
        created = service.request_leave(
            caller,
            leave_type=body.get("type"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
            reason=body.get("reason"),
        )
        return jsonify({"message": "Leave request submitted", "id": created.id, "days": created.days}), 201

    @app.route("/api/leaves/<int:request_id>/approve", methods=["PUT"], endpoint="leaves_decide")
    @login_required
    def decide_leave(request_id: int, caller):
        body = request.get_json(silent=True) or {}
        decided = service.decide(caller, request_id, body.get("status"))
        return jsonify({"message": f"Leave request {decided.status.value}", "request": to_json(decided)})

    @app.route("/api/leaves/balance", methods=["GET"], endpoint="leaves_balance")
    @app.route("/api/leaves/balance/<int:employee_id>", methods=["GET"], endpoint="leaves_balance_of")
    @login_required
    def balance(caller, employee_id=None):
        return jsonify(to_json(service.balance(caller, employee_id)))
