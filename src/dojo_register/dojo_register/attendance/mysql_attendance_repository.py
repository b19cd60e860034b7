from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import ClassCategory
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceEntry, AttendanceRow
from .repository import AttendanceRepository


def _row_to_entry(r: dict) -> AttendanceEntry:
    return AttendanceEntry(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        attendance_date=r["attendance_date"],
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, student_id: int, attendance_date: date) -> AttendanceEntry:
        # The UNIQUE(student_id, attendance_date) index decides concurrent sign-ins.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance(student_id, attendance_date) VALUES(%s,%s)",
                    (int(student_id), attendance_date),
                )
                cur.execute(
                    """
                    SELECT attendance_id, student_id, attendance_date, created_at
                    FROM attendance
                    WHERE attendance_id=%s
                    """,
                    (int(cur.lastrowid),),
                )
                return _row_to_entry(fetchone(cur))
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Attendance already logged for this date") from e
            raise

    def list_rows(
        self,
        *,
        student_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if student_id is not None:
            clauses.append("a.student_id=%s")
            params.append(int(student_id))
        if start_date is not None:
            clauses.append("a.attendance_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.attendance_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.attendance_id, a.student_id, a.attendance_date, a.created_at,
                       s.name, s.class_category
                FROM attendance a
                JOIN students s ON s.student_id = a.student_id
                WHERE {where}
                ORDER BY a.attendance_date DESC, s.name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceRow(
                    entry=_row_to_entry(r),
                    name=r["name"],
                    class_category=ClassCategory(r["class_category"]),
                )
                for r in fetchall(cur)
            ]

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
