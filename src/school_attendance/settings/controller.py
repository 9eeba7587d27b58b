from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import build_guards
from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = build_guards(container.auth_service)

    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @token_required
    def get_settings():
        try:
            return jsonify(container.settings_service.get_settings().to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    @admin_required
    def update_settings():
        try:
            data = json_body()
            container.settings_service.update_settings(
                min_attendance_percent=data.get("min_attendance_percent"),
                max_absences=data.get("max_absences"),
            )
            return jsonify({"message": "Settings updated"})
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
