from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import build_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = build_admin_required(container.token_service)
    service = container.report_service

    def _period() -> dict:
        return {"month": request.args.get("month"), "year": request.args.get("year")}

    @app.route("/api/attendance/report/by-student", methods=["GET"], endpoint="report_by_student")
    @admin_required
    def by_student():
        rows = service.by_student(category=request.args.get("category"), **_period())
        return jsonify([r.as_dict() for r in rows])

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="report_stats")
    @admin_required
    def stats():
        return jsonify([s.as_dict() for s in service.category_stats(**_period())])

    @app.route("/api/attendance/report/over-attendance", methods=["GET"], endpoint="report_over_attendance")
    @admin_required
    def over_attendance():
        rows = service.over_allocation(**_period())
        return jsonify([r.as_over_allocation_dict() for r in rows])

    @app.route("/api/attendance/report/age-transitions", methods=["GET"], endpoint="report_age_transitions")
    @admin_required
    def age_transitions():
        return jsonify([t.as_dict() for t in service.age_transitions(**_period())])
