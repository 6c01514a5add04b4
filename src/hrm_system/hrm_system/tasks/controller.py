from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..common.validators import parse_optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="tasks_list")
    @login_required
    def list_tasks(caller):
        tasks = service.list_tasks(
            caller,
            status=request.args.get("status"),
            priority=request.args.get("priority"),
            assigned_to=parse_optional_int(request.args.get("assignedTo"), "assignedTo"),
        )
        return jsonify(to_json(list(tasks)))

    @app.route("/api/tasks", methods=["POST"], endpoint="tasks_create")
    @login_required
    def create_task(caller):
        task_id = service.create_task(caller, request.get_json(silent=True) or {})
        return jsonify({"message": "Task created", "id": task_id}), 201

    @app.route("/api/tasks/stats", methods=["GET"], endpoint="tasks_stats")
    @login_required
    def stats(caller):
        return jsonify(service.stats(caller))

    @app.route("/api/tasks/<int:task_id>/progress", methods=["PUT"], endpoint="tasks_progress")
    @login_required
    def update_progress(task_id: int, caller):
        body = request.get_json(silent=True) or {}
        task = service.update_progress(caller, task_id, body.get("progress"))
        return jsonify({"message": "Progress updated", "task": to_json(task)})

    @app.route("/api/tasks/<int:task_id>/status", methods=["PUT"], endpoint="tasks_status")
    @login_required
    def update_status(task_id: int, caller):
        body = request.get_json(silent=True) or {}
        task = service.update_status(caller, task_id, body.get("status"))
        return jsonify({"message": "Status updated", "task": to_json(task)})

    @app.route("/api/tasks/<int:task_id>/comments", methods=["POST"], endpoint="tasks_comment")
    @login_required
    def add_comment(task_id: int, caller):
        body = request.get_json(silent=True) or {}
        comment = service.add_comment(caller, task_id, body.get("comment"))
        return jsonify({"message": "Comment added", "comment": to_json(comment)}), 201
