from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DEFAULT_MONTHLY_LESSONS
from ..core.enums import ClassCategory


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled at the academy.

    Note: Plain data object (no DB access code). ``active=False`` is a logical
    delete; historical attendance still joins to the row.
    """

    student_id: int
    name: str
    class_category: ClassCategory
    registration_number: Optional[str] = None
    monthly_lessons: int = DEFAULT_MONTHLY_LESSONS
    date_of_birth: Optional[date] = None
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.student_id,
            "name": self.name,
            "registration_number": self.registration_number,
            "class_category": self.class_category.value,
            "monthly_lessons": self.monthly_lessons,
            "date_of_birth": self.date_of_birth.isoformat() if self.date_of_birth else None,
            "active": self.active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class StudentDraft:
    """Validated input for create/update."""

    name: str
    class_category: ClassCategory
    registration_number: Optional[str]
    monthly_lessons: int
    date_of_birth: Optional[date]
    active: bool = True
