from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ClassCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..students.mysql_student_repository import row_to_student
from .model import StudentClassCount
from .repository import ReportRepository


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_class_counts(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[ClassCategory] = None,
    ) -> Sequence[StudentClassCount]:
        # Date filters live in the JOIN so students without attendance keep a zero row.
        join_clauses = ["a.student_id = s.student_id"]
        join_params: list[object] = []
        if start_date is not None:
            join_clauses.append("a.attendance_date >= %s")
            join_params.append(start_date)
        if end_date is not None:
            join_clauses.append("a.attendance_date <= %s")
            join_params.append(end_date)

        where_clauses = ["s.active = 1"]
        where_params: list[object] = []
        if category is not None:
            where_clauses.append("s.class_category = %s")
            where_params.append(category.value)

        on = " AND ".join(join_clauses)
        where = " AND ".join(where_clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.student_id, s.name, s.registration_number, s.class_category,
                       s.monthly_lessons, s.date_of_birth, s.active, s.created_at, s.updated_at,
                       COUNT(a.attendance_id) AS total_classes
                FROM students s
                LEFT JOIN attendance a ON {on}
                WHERE {where}
                GROUP BY s.student_id, s.name, s.registration_number, s.class_category,
                         s.monthly_lessons, s.date_of_birth, s.active, s.created_at, s.updated_at
                ORDER BY CAST(s.class_category AS CHAR), s.name
                """,
                tuple(join_params + where_params),
            )
            return [
                StudentClassCount(student=row_to_student(r), total_classes=int(r["total_classes"]))
                for r in fetchall(cur)
            ]
