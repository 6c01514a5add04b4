from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from .guard import token_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = request.get_json(silent=True) or {}
        issued = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        logger.info("User %s logged in", issued.user.id)
        return jsonify(
            {
                "message": "Login successful",
                "token": issued.token,
                "expires_in": issued.expires_in,
                "user": {**issued.user.profile(), "employee_id": issued.employee_id},
            }
        )

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me(caller):
        return jsonify(container.auth_service.me(caller))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @login_required
    def logout(caller):
        # Tokens are stateless; the client discards its copy.
        return jsonify({"message": "Logged out"})
