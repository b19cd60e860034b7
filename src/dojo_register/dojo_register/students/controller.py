from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import build_admin_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = build_admin_required(container.token_service)
    service = container.student_service

    @app.route("/api/students/search", methods=["GET"], endpoint="students_search")
    def search_students():
        """Kiosk lookup: public, so it only returns what the sign-in screen shows."""
        students = service.search(request.args.get("query"))
        return jsonify(
            [{"id": s.student_id, "name": s.name, "class_category": s.class_category.value} for s in students]
        )

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @admin_required
    def list_students():
        students = service.list(category=request.args.get("category"), active=request.args.get("active"))
        return jsonify([service.present(s) for s in students])

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="students_get")
    @admin_required
    def get_student(student_id: int):
        return jsonify(service.present(service.get(student_id)))

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @admin_required
    def create_student():
        student = service.create(json_body())
        return jsonify(service.present(student)), 201

    @app.route("/api/students/<int:student_id>", methods=["PUT"], endpoint="students_update")
    @admin_required
    def update_student(student_id: int):
        student = service.update(student_id, json_body())
        return jsonify(service.present(student))

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    @admin_required
    def delete_student(student_id: int):
        service.deactivate(student_id)
        return jsonify({"message": "Student deactivated successfully"})
