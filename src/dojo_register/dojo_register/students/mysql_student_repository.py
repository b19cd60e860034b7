from __future__ import annotations

from typing import Any, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import ClassCategory
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Student, StudentDraft
from .repository import StudentRepository

_COLUMNS = """
    student_id, name, registration_number, class_category, monthly_lessons,
    date_of_birth, active, created_at, updated_at
"""


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped.lower()}%"


def row_to_student(r: dict[str, Any]) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        registration_number=r.get("registration_number"),
        class_category=ClassCategory(r["class_category"]),
        monthly_lessons=int(r["monthly_lessons"]),
        date_of_birth=r.get("date_of_birth"),
        active=bool(r.get("active", True)),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE {where}", params)
            r = fetchone(cur)
            return row_to_student(r) if r else None

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._get_one("student_id=%s", (int(student_id),))

    def get_active_by_id(self, student_id: int) -> Optional[Student]:
        return self._get_one("student_id=%s AND active=1", (int(student_id),))

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        return self._get_one("registration_number=%s", (registration_number,))

    def list(
        self,
        *,
        category: Optional[ClassCategory] = None,
        active: Optional[bool] = None,
    ) -> Sequence[Student]:
        clauses = ["1=1"]
        params: list[object] = []

        if category is not None:
            clauses.append("class_category=%s")
            params.append(category.value)
        if active is not None:
            clauses.append("active=%s")
            params.append(1 if active else 0)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE {where} ORDER BY CAST(class_category AS CHAR), name",
                tuple(params),
            )
            return [row_to_student(r) for r in fetchall(cur)]

    def search_active(self, term: str, *, limit: int) -> Sequence[Student]:
        pattern = _like_pattern(term)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students
                WHERE active=1
                  AND (LOWER(name) LIKE %s OR LOWER(registration_number) LIKE %s)
                ORDER BY name
                LIMIT %s
                """,
                (pattern, pattern, int(limit)),
            )
            return [row_to_student(r) for r in fetchall(cur)]

    def create(self, draft: StudentDraft) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(name, registration_number, class_category, monthly_lessons, date_of_birth, active)
                    VALUES(%s,%s,%s,%s,%s,1)
                    """,
                    (
                        draft.name,
                        draft.registration_number,
                        draft.class_category.value,
                        draft.monthly_lessons,
                        draft.date_of_birth,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Registration number already exists") from e
            raise

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE students
                    SET name=%s, registration_number=%s, class_category=%s,
                        monthly_lessons=%s, date_of_birth=%s, active=%s
                    WHERE student_id=%s
                    """,
                    (
                        draft.name,
                        draft.registration_number,
                        draft.class_category.value,
                        draft.monthly_lessons,
                        draft.date_of_birth,
                        1 if draft.active else 0,
                        int(student_id),
                    ),
                )
                return cur.rowcount > 0
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Registration number already exists") from e
            raise

    def set_active(self, student_id: int, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET active=%s WHERE student_id=%s",
                (1 if active else 0, int(student_id)),
            )
            return cur.rowcount > 0
