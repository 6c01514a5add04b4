from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.dashboard_service

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @login_required
    def stats(caller):
        return jsonify(to_json(service.stats(caller)))

    @app.route("/api/dashboard/recent-activities", methods=["GET"], endpoint="dashboard_recent")
    @login_required
    def recent_activities(caller):
        return jsonify(to_json(list(service.recent_activities(caller))))
