from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    identifiers = container.identifier_service
    runner = container.batch_runner

    def _target_response(status: int = 200):
        auto_started = runner.maybe_auto_execute(background=bool(current_app.config.get("BATCH_IN_BACKGROUND", True)))
        return jsonify({"success": True, "attendanceId": identifiers.current, "autoStarted": auto_started}), status

    @app.route("/api/target", methods=["GET"], endpoint="get_target")
    def get_target():
        return jsonify({"success": True, "attendanceId": identifiers.current})

    @app.route("/api/target", methods=["POST"], endpoint="set_target")
    def set_target():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "JSON object expected"}), 400
        identifiers.set_manual(str(data.get("attendanceId") or ""))
        return _target_response()

    @app.route("/api/target/scan", methods=["POST"], endpoint="scan_target")
    def scan_target():
        """Decode an uploaded QR image (form field ``image``) into the attendance ID."""
        upload = request.files.get("image")
        try:
            identifiers.set_from_image(upload.read() if upload else b"")
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return _target_response()

    @app.route("/api/target", methods=["DELETE"], endpoint="clear_target")
    def clear_target():
        identifiers.clear()
        return jsonify({"success": True, "attendanceId": ""})
