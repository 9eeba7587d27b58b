from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            result = container.auth_service.login(
                str(data.get("username") or ""),
                str(data.get("password") or ""),
            )
            return jsonify(result.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
