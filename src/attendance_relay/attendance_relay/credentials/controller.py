from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import token_preview
from ..container import Container
from ..core.exceptions import MalformedInputError
from .model import CredentialRecord


def _record_json(record: CredentialRecord) -> dict:
    data = record.to_dict()
    # The full cookie never leaves the server once stored.
    data["connectSid"] = token_preview(record.session_token)
    return data


def register(app: Flask, container: Container) -> None:
    store = container.credential_store

    @app.route("/api/credentials", methods=["GET"], endpoint="list_credentials")
    def list_credentials():
        records = store.list_records()
        return jsonify({"success": True, "count": len(records), "credentials": [_record_json(r) for r in records]})

    @app.route("/api/credentials", methods=["POST"], endpoint="quick_add_credential")
    def quick_add_credential():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "JSON object expected"}), 400
        record = store.quick_add(
            str(data.get("connectSid") or data.get("connect_sid") or ""),
            display_name=data.get("name"),
            secondary_identifier=data.get("stuId"),
        )
        if record is None:
            return jsonify({"success": False, "message": "connect.sid is required"}), 400
        return jsonify({"success": True, "credential": _record_json(record)}), 201

    @app.route("/api/credentials/import", methods=["POST"], endpoint="import_credentials")
    def import_credentials():
        raw = request.get_data(as_text=True)
        try:
            admitted = store.bulk_import(raw)
        except MalformedInputError as e:
            return jsonify({"success": False, "message": f"Invalid JSON format or missing connect.sid: {e}"}), 400
        return jsonify({"success": True, "imported": len(admitted), "credentials": [_record_json(r) for r in admitted]})

    @app.route("/api/credentials/<record_id>", methods=["DELETE"], endpoint="delete_credential")
    def delete_credential(record_id: str):
        removed = store.remove(record_id)
        return jsonify({"success": True, "removed": removed})
