from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import NoTargetIdentifierError


def register(app: Flask, container: Container) -> None:
    runner = container.batch_runner
    sink = container.log_sink

    def _status() -> dict:
        summary = runner.last_summary
        return {
            "state": runner.state.value,
            "autoExecute": runner.auto_execute,
            "pacingSeconds": runner.pacing_seconds,
            "attendanceId": container.identifier_service.current,
            "credentials": len(container.credential_store),
            "lastRun": None
            if summary is None
            else {
                "attendanceId": summary.target_identifier,
                "attempted": summary.attempted,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
            },
        }

    @app.route("/api/batch/run", methods=["POST"], endpoint="run_batch")
    def run_batch():
        try:
            if app.config.get("BATCH_IN_BACKGROUND", True):
                started = runner.start_in_background()
            else:
                started = runner.run() is not None
        except NoTargetIdentifierError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        if not started:
            return jsonify({"success": False, "message": "A batch is already running"}), 409
        status = 202 if app.config.get("BATCH_IN_BACKGROUND", True) else 200
        return jsonify({"success": True, **_status()}), status

    @app.route("/api/batch/status", methods=["GET"], endpoint="batch_status")
    def batch_status():
        return jsonify({"success": True, **_status()})

    @app.route("/api/batch/auto-execute", methods=["POST"], endpoint="set_auto_execute")
    def set_auto_execute():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "JSON object expected"}), 400
        runner.auto_execute = bool(data.get("enabled"))
        return jsonify({"success": True, **_status()})

    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    def list_logs():
        return jsonify({"success": True, "logs": [e.to_dict() for e in sink.entries()]})

    @app.route("/api/logs.csv", methods=["GET"], endpoint="logs_csv")
    def logs_csv():
        return app.response_class(
            sink.export_csv(),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance_log.csv"},
        )

    @app.route("/api/logs", methods=["DELETE"], endpoint="clear_logs")
    def clear_logs():
        sink.clear()
        return jsonify({"success": True})
