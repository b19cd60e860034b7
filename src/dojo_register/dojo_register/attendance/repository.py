from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry, AttendanceRow


class AttendanceRepository(Protocol):
    def create(self, *, student_id: int, attendance_date: date) -> AttendanceEntry:
        """Insert one entry; raises ConflictError when the student already has one that day."""

        raise NotImplementedError

    def list_rows(
        self,
        *,
        student_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRow]:
        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
