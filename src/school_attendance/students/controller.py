from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import build_guards
from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, admin_required = build_guards(container.auth_service)

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @token_required
    def list_students():
        try:
            students = container.student_service.list_students(class_name=request.args.get("class"))
            return jsonify([s.to_dict() for s in students])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @token_required
    def list_classes():
        try:
            return jsonify(list(container.student_service.list_classes()))
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @token_required
    def create_student():
        try:
            data = json_body()
            student = container.student_service.create_student(
                name=data.get("name"),
                roll_number=data.get("roll_number"),
                class_name=data.get("class"),
            )
            return jsonify(student.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @admin_required
    def delete_student(student_id: int):
        try:
            container.student_service.delete_student(student_id)
            return jsonify({"message": "Student deleted"})
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
