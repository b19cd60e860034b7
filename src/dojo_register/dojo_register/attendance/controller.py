from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import build_admin_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = build_admin_required(container.token_service)

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_sign_in")
    def sign_in():
        """Kiosk sign-in (public). A second sign-in on the same day answers 409."""
        result = container.attendance_service.sign_in(json_body().get("student_id"))
        return (
            jsonify(
                {
                    "message": "Attendance logged successfully",
                    "attendance": result.attendance.as_dict(),
                    "student": result.student.as_dict(),
                }
            ),
            201,
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @admin_required
    def list_attendance():
        rows = container.attendance_service.list_entries(
            student_id=request.args.get("student_id"),
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify([r.as_dict() for r in rows])

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @admin_required
    def delete_attendance(attendance_id: int):
        container.attendance_service.delete_entry(attendance_id)
        return jsonify({"message": "Attendance record deleted successfully"})
