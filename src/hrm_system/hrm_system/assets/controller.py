from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..common.serialization import to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.auth_service)
    service = container.asset_service

    @app.route("/api/assets", methods=["GET"], endpoint="assets_list")
    @login_required
    def list_assets(caller):
        assets = service.list_assets(
            caller,
            status=request.args.get("status"),
            asset_type=request.args.get("type"),
            search=request.args.get("search"),
        )
        return jsonify(to_json(list(assets)))

    @app.route("/api/assets", methods=["POST"], endpoint="assets_create")
    @login_required
    def create_asset(caller):
        asset_id = service.create_asset(caller, request.get_json(silent=True) or {})
        return jsonify({"message": "Asset created", "id": asset_id}), 201

    @app.route("/api/assets/stats", methods=["GET"], endpoint="assets_stats")
    @login_required
    def stats(caller):
        return jsonify(to_json(service.stats(caller)))

    @app.route("/api/assets/<int:asset_id>", methods=["PUT"], endpoint="assets_update")
    @login_required
    def update_asset(asset_id: int, caller):
        asset = service.update_asset(caller, asset_id, request.get_json(silent=True) or {})
        return jsonify({"message": "Asset updated", "asset": to_json(asset)})

    @app.route("/api/assets/<int:asset_id>/assign", methods=["PUT"], endpoint="assets_assign")
    @login_required
    def assign_asset(asset_id: int, caller):
        body = request.get_json(silent=True) or {}
        asset = service.assign_asset(caller, asset_id, body.get("employee_id"))
        return jsonify({"message": "Asset assigned", "asset": to_json(asset)})

    @app.route("/api/assets/<int:asset_id>/return", methods=["PUT"], endpoint="assets_return")
    @login_required
    def return_asset(asset_id: int, caller):
        asset = service.return_asset(caller, asset_id)
        return jsonify({"message": "Asset returned", "asset": to_json(asset)})
