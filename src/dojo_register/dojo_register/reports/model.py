from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import ClassCategory
from ..students.model import Student


@dataclass(frozen=True)
class StudentClassCount:
    """Read-model: an active student and how many classes they attended in the period."""

    student: Student
    total_classes: int

    @property
    def over_by(self) -> int:
        return self.total_classes - self.student.monthly_lessons

    def as_dict(self) -> dict[str, Any]:
        s = self.student
        return {
            "id": s.student_id,
            "name": s.name,
            "registration_number": s.registration_number,
            "class_category": s.class_category.value,
            "monthly_lessons": s.monthly_lessons,
            "total_classes": self.total_classes,
        }

    def as_over_allocation_dict(self) -> dict[str, Any]:
        data = self.as_dict()
        del data["total_classes"]
        data["total_attended"] = self.total_classes
        data["over_by"] = self.over_by
        return data


@dataclass(frozen=True)
class CategoryStats:
    class_category: ClassCategory
    total_students: int
    total_attendances: int
    avg_classes_per_student: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "class_category": self.class_category.value,
            "total_students": self.total_students,
            "total_attendances": self.total_attendances,
            "avg_classes_per_student": self.avg_classes_per_student,
        }
