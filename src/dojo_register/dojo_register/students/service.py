from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..ages.classifier import age_range, calculate_age
from ..common.datetime_utils import today_local
from ..common.validators import (
    parse_category,
    parse_optional_date,
    require_int,
    require_non_empty,
    require_positive_int,
)
from ..core.constants import DEFAULT_MONTHLY_LESSONS, SEARCH_LIMIT, SEARCH_MIN_LENGTH
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Student, StudentDraft
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def _parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"true", "false"}:
        return value.lower() == "true"
    raise ValidationError(f"{field_name} must be true or false")


class StudentService:
    """Use cases: manage the student register (admin) and search it (kiosk)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def present(self, student: Student, *, today: Optional[date] = None) -> dict[str, Any]:
        """Student as returned by the admin API, with the age shown on the dashboard."""
        age = calculate_age(student.date_of_birth, today or today_local())
        data = student.as_dict()
        data["age"] = age
        data["testing_age_range"] = age_range(age).value if age is not None else None
        return data

    def search(self, query: Optional[str]) -> Sequence[Student]:
        term = (query or "").strip()
        if len(term) < SEARCH_MIN_LENGTH:
            raise ValidationError(f"Search query must be at least {SEARCH_MIN_LENGTH} characters")
        return self._students.search_active(term, limit=SEARCH_LIMIT)

    def list(self, *, category: Optional[str] = None, active: Any = None) -> Sequence[Student]:
        cat = parse_category(category) if category else None
        is_active = _parse_bool(active, "active") if active not in (None, "") else None
        return self._students.list(category=cat, active=is_active)

    def get(self, student_id: Any) -> Student:
        student = self._students.get_by_id(require_int(student_id, "Student ID"))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _draft(self, data: dict[str, Any]) -> StudentDraft:
        name = data.get("name")
        if not name or not str(name).strip() or not data.get("class_category"):
            raise ValidationError("Name and class category required")

        registration_number = data.get("registration_number")
        if registration_number is not None:
            registration_number = str(registration_number).strip() or None

        monthly_lessons = data.get("monthly_lessons")
        if monthly_lessons in (None, ""):
            monthly_lessons = DEFAULT_MONTHLY_LESSONS

        date_of_birth = parse_optional_date(data.get("date_of_birth"), "Date of birth")
        if date_of_birth is not None and date_of_birth > today_local():
            raise ValidationError("Date of birth cannot be in the future")

        active = data.get("active")
        return StudentDraft(
            name=require_non_empty(name, "Name"),
            class_category=parse_category(data.get("class_category")),
            registration_number=registration_number,
            monthly_lessons=require_positive_int(monthly_lessons, "Monthly lessons"),
            date_of_birth=date_of_birth,
            active=True if active is None else _parse_bool(active, "active"),
        )

    def _ensure_registration_number_free(self, draft: StudentDraft, *, student_id: Optional[int] = None) -> None:
        if not draft.registration_number:
            return
        existing = self._students.get_by_registration_number(draft.registration_number)
        if existing and existing.student_id != student_id:
            raise ConflictError("Registration number already exists")

    def create(self, data: dict[str, Any]) -> Student:
        draft = self._draft(data)
        self._ensure_registration_number_free(draft)

        student_id = self._students.create(draft)
        logger.info("Created student %s (%s)", student_id, draft.class_category.value)
        return self.get(student_id)

    def update(self, student_id: Any, data: dict[str, Any]) -> Student:
        current = self.get(student_id)
        draft = self._draft(data)
        self._ensure_registration_number_free(draft, student_id=current.student_id)

        if not self._students.update(current.student_id, draft):
            raise NotFoundError("Student not found")
        logger.info("Updated student %s", current.student_id)
        return self.get(current.student_id)

    def deactivate(self, student_id: Any) -> None:
        sid = require_int(student_id, "Student ID")
        if not self._students.set_active(sid, active=False):
            raise NotFoundError("Student not found")
        logger.info("Deactivated student %s", sid)

