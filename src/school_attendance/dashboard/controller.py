from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import build_guards
from ..common.http import error_response, internal_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = build_guards(container.auth_service)

    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @admin_required
    def dashboard_stats():
        try:
            return jsonify(container.dashboard_service.get_stats().to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
