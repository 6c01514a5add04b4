from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..common.validators import parse_optional_date, parse_optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.report_service

    @app.route("/api/reports", methods=["POST"], endpoint="reports_submit")
    @login_required
    def submit_report(caller):
        report_id = service.submit(caller, request.get_json(silent=True) or {})
        return jsonify({"message": "Report submitted", "id": report_id}), 201

    @app.route("/api/reports/draft", methods=["POST"], endpoint="reports_draft")
    @login_required
    def save_draft(caller):
        report_id = service.save_draft(caller, request.get_json(silent=True) or {})
        return jsonify({"message": "Draft saved", "id": report_id}), 201

    @app.route("/api/reports", methods=["GET"], endpoint="reports_list")
    @login_required
    def list_reports(caller):
        reports = service.list_reports(
            caller,
            status=request.args.get("status"),
            report_type=request.args.get("type"),
            employee_id=parse_optional_int(request.args.get("employeeId"), "employeeId"),
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
        )
        return jsonify(to_json(list(reports)))

    @app.route("/api/reports/<int:report_id>/approve", methods=["PUT"], endpoint="reports_decide")
    @login_required
    def decide_report(report_id: int, caller):
        body = request.get_json(silent=True) or {}
        report = service.decide(caller, report_id, body.get("status"), body.get("feedback"))
        return jsonify({"message": f"Report {report.status.value}", "report": to_json(report)})

    @app.route("/api/reports/stats", methods=["GET"], endpoint="reports_stats")
    @login_required
    def stats(caller):
        return jsonify(service.stats(caller))
