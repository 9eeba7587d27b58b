from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guards import build_guards
from ..common.http import error_response, internal_error, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = build_guards(container.auth_service)

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @token_required
    def mark_attendance():
        try:
            data = json_body()
            container.attendance_service.mark_attendance(
                day=data.get("date"),
                records=data.get("attendance"),
                marked_by=g.current_user.id,
            )
            return jsonify({"message": "Attendance marked successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/attendance", methods=["GET"], endpoint="get_attendance")
    @token_required
    def get_attendance():
        try:
            records = container.attendance_service.get_attendance(
                day=request.args.get("date"),
                class_name=request.args.get("class"),
                student_id=request.args.get("student_id"),
            )
            return jsonify([r.to_dict() for r in records])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @token_required
    def attendance_stats():
        try:
            stats = container.attendance_service.get_stats(class_name=request.args.get("class"))
            return jsonify([s.to_dict() for s in stats])
        except DomainError as e:
            return error_response(e)
        except Exception as e:
            return internal_error(e)
