from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..common.validators import parse_optional_date, parse_optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin(caller):
        body = request.get_json(silent=True) or {}
        entry = service.check_in(caller, location=body.get("location"), work_type=body.get("type"))
        return jsonify({"message": "Checked in", "entry": to_json(entry)}), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout(caller):
        entry = service.check_out(caller)
        return jsonify({"message": "Checked out", "entry": to_json(entry)})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history(caller):
        entries = service.history(
            caller,
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
            employee_id=parse_optional_int(request.args.get("employeeId"), "employeeId"),
        )
        return jsonify(to_json(list(entries)))

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    def stats(caller):
        summary = service.stats(
            caller,
            month=parse_optional_int(request.args.get("month"), "month"),
            year=parse_optional_int(request.args.get("year"), "year"),
            employee_id=parse_optional_int(request.args.get("employeeId"), "employeeId"),
        )
        return jsonify(to_json(summary))
