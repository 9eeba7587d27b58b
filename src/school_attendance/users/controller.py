from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import build_guards
from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = build_guards(container.auth_service)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        try:
            users = container.user_service.list_users()
            return jsonify([u.to_public() for u in users])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        try:
            data = json_body()
            user = container.user_service.create_user(
                username=data.get("username"),
                password=data.get("password"),
                role=data.get("role"),
            )
            return jsonify(user.to_public()), 201
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        try:
            container.user_service.delete_user(user_id)
            return jsonify({"message": "User deleted"})
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
