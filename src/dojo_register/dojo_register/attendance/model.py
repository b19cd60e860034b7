from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import ClassCategory
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one student's sign-in for one calendar day."""

    attendance_id: int
    student_id: int
    attendance_date: date
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "attendance_date": self.attendance_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the admin attendance listing (entry joined with its student)."""

    entry: AttendanceEntry
    name: str
    class_category: ClassCategory

    def as_dict(self) -> dict[str, Any]:
        data = self.entry.as_dict()
        data["name"] = self.name
        data["class_category"] = self.class_category.value
        return data


@dataclass(frozen=True)
class SignInResult:
    attendance: AttendanceEntry
    student: Student
