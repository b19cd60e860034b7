from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import month_bounds, today_local
from ..common.validators import parse_month_year, parse_optional_date, require_int
from ..core.exceptions import ConflictError, NotFoundError
from ..students.repository import StudentRepository
from .model import AttendanceRow, SignInResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _narrow(current: Optional[date], bound: date, *, pick) -> date:
    return bound if current is None else pick(current, bound)


class AttendanceService:
    """Use cases: kiosk sign-in and admin corrections of the attendance log."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def sign_in(self, student_id: Any, *, today: Optional[date] = None) -> SignInResult:
        sid = require_int(student_id, "Student ID")
        today = today or today_local()

        student = self._students.get_active_by_id(sid)
        if not student:
            raise NotFoundError("Student not found or inactive")

        try:
            entry = self._attendance.create(student_id=sid, attendance_date=today)
        except ConflictError as e:
            logger.info("Student %s already signed in on %s", sid, today)
            raise ConflictError(
                "Attendance already logged for today",
                payload={"student": student.as_dict()},
            ) from e

        logger.info("Student %s signed in on %s", sid, today)
        return SignInResult(attendance=entry, student=student)

    def list_entries(
        self,
        *,
        student_id: Any = None,
        start_date: Any = None,
        end_date: Any = None,
        month: Any = None,
        year: Any = None,
    ) -> Sequence[AttendanceRow]:
        sid = require_int(student_id, "Student ID") if student_id not in (None, "") else None
        start = parse_optional_date(start_date, "Start date")
        end = parse_optional_date(end_date, "End date")

        period = parse_month_year(month, year)
        if period:
            first_day, last_day = month_bounds(*period)
            start = _narrow(start, first_day, pick=max)
            end = _narrow(end, last_day, pick=min)

        return self._attendance.list_rows(student_id=sid, start_date=start, end_date=end)

    def delete_entry(self, attendance_id: Any) -> None:
        aid = require_int(attendance_id, "Attendance ID")
        if not self._attendance.delete(aid):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted attendance entry %s", aid)
