from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.dojo_register.dojo_register.attendance.model import AttendanceEntry, AttendanceRow
from src.dojo_register.dojo_register.auth.model import AdminUser
from src.dojo_register.dojo_register.container import wire
from src.dojo_register.dojo_register.core.enums import ClassCategory
from src.dojo_register.dojo_register.core.exceptions import ConflictError
from src.dojo_register.dojo_register.main import create_app
from src.dojo_register.dojo_register.reports.model import StudentClassCount
from src.dojo_register.dojo_register.students.model import Student, StudentDraft

SECRET = "test-secret"


class InMemoryStudents:
    """Mirrors the MySQL table, including the UNIQUE registration_number index."""

    def __init__(self):
        self.by_id: dict[int, Student] = {}
        self._id = 0

    def _reg_taken(self, registration_number: Optional[str], *, exclude_id: Optional[int] = None) -> bool:
        return bool(registration_number) and any(
            s.registration_number == registration_number and s.student_id != exclude_id for s in self.by_id.values()
        )

    def add(self, name: str, category: ClassCategory = ClassCategory.ADULTS, **fields) -> Student:
        self._id += 1
        student = Student(student_id=self._id, name=name, class_category=category, **fields)
        self.by_id[self._id] = student
        return student

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.by_id.get(student_id)

    def get_active_by_id(self, student_id: int) -> Optional[Student]:
        s = self.by_id.get(student_id)
        return s if s and s.active else None

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        return next((s for s in self.by_id.values() if s.registration_number == registration_number), None)

    def list(self, *, category=None, active=None):
        items = [
            s
            for s in self.by_id.values()
            if (category is None or s.class_category == category) and (active is None or s.active == active)
        ]
        items.sort(key=lambda s: (s.class_category.value, s.name))
        return items

    def search_active(self, term: str, *, limit: int):
        needle = term.lower()
        items = [
            s
            for s in self.by_id.values()
            if s.active and (needle in s.name.lower() or needle in (s.registration_number or "").lower())
        ]
        items.sort(key=lambda s: s.name)
        return items[:limit]

    def create(self, draft: StudentDraft) -> int:
        if self._reg_taken(draft.registration_number):
            raise ConflictError("Registration number already exists")
        student = self.add(
            draft.name,
            draft.class_category,
            registration_number=draft.registration_number,
            monthly_lessons=draft.monthly_lessons,
            date_of_birth=draft.date_of_birth,
            created_at=datetime(2026, 1, 1, 9, 0, 0),
        )
        return student.student_id

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        current = self.by_id.get(student_id)
        if not current:
            return False
        if self._reg_taken(draft.registration_number, exclude_id=student_id):
            raise ConflictError("Registration number already exists")
        self.by_id[student_id] = replace(
            current,
            name=draft.name,
            class_category=draft.class_category,
            registration_number=draft.registration_number,
            monthly_lessons=draft.monthly_lessons,
            date_of_birth=draft.date_of_birth,
            active=draft.active,
        )
        return True

    def set_active(self, student_id: int, *, active: bool) -> bool:
        current = self.by_id.get(student_id)
        if not current:
            return False
        self.by_id[student_id] = replace(current, active=active)
        return True


class InMemoryAttendance:
    """Mirrors the UNIQUE(student_id, attendance_date) index of the attendance table."""

    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.entries: dict[int, AttendanceEntry] = {}
        self._id = 0

    def create(self, *, student_id: int, attendance_date: date) -> AttendanceEntry:
        if any(e.student_id == student_id and e.attendance_date == attendance_date for e in self.entries.values()):
            raise ConflictError("Attendance already logged for this date")
        self._id += 1
        entry = AttendanceEntry(
            attendance_id=self._id,
            student_id=student_id,
            attendance_date=attendance_date,
            created_at=datetime.combine(attendance_date, datetime.min.time()),
        )
        self.entries[self._id] = entry
        return entry

    def add_many(self, student_id: int, days) -> None:
        for d in days:
            self.create(student_id=student_id, attendance_date=d)

    def list_rows(self, *, student_id=None, start_date=None, end_date=None):
        rows = []
        for e in self.entries.values():
            if student_id is not None and e.student_id != student_id:
                continue
            if start_date is not None and e.attendance_date < start_date:
                continue
            if end_date is not None and e.attendance_date > end_date:
                continue
            s = self._students.get_by_id(e.student_id)
            rows.append(AttendanceRow(entry=e, name=s.name, class_category=s.class_category))
        rows.sort(key=lambda r: r.name)
        rows.sort(key=lambda r: r.entry.attendance_date, reverse=True)
        return rows

    def delete(self, attendance_id: int) -> bool:
        return self.entries.pop(attendance_id, None) is not None


class InMemoryReports:
    def __init__(self, students: InMemoryStudents, attendance: InMemoryAttendance):
        self._students = students
        self._attendance = attendance
        self.last_args = None

    def get_class_counts(self, *, start_date=None, end_date=None, category=None):
        self.last_args = {"start_date": start_date, "end_date": end_date, "category": category}
        out = []
        for s in self._students.list(category=category, active=True):
            total = sum(
                1
                for e in self._attendance.entries.values()
                if e.student_id == s.student_id
                and (start_date is None or e.attendance_date >= start_date)
                and (end_date is None or e.attendance_date <= end_date)
            )
            out.append(StudentClassCount(student=s, total_classes=total))
        return out


class InMemoryAdmins:
    def __init__(self):
        self.by_id: dict[int, AdminUser] = {}

    def add(self, username: str, password: str) -> AdminUser:
        admin = AdminUser(admin_id=len(self.by_id) + 1, username=username, password_hash=generate_password_hash(password))
        self.by_id[admin.admin_id] = admin
        return admin

    def get_by_id(self, admin_id: int) -> Optional[AdminUser]:
        return self.by_id.get(admin_id)

    def get_by_username(self, username: str) -> Optional[AdminUser]:
        return next((a for a in self.by_id.values() if a.username == username), None)

    def update_password_hash(self, admin_id: int, password_hash: str) -> bool:
        current = self.by_id.get(admin_id)
        if not current:
            return False
        self.by_id[admin_id] = replace(current, password_hash=password_hash)
        return True


@pytest.fixture
def students_repo():
    return InMemoryStudents()


@pytest.fixture
def attendance_repo(students_repo):
    return InMemoryAttendance(students_repo)


@pytest.fixture
def reports_repo(students_repo, attendance_repo):
    return InMemoryReports(students_repo, attendance_repo)


@pytest.fixture
def admins_repo():
    repo = InMemoryAdmins()
    repo.add("admin", "admin123")
    return repo


@pytest.fixture
def container(students_repo, attendance_repo, reports_repo, admins_repo):
    return wire(
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        admins_repo=admins_repo,
        secret_key=SECRET,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(container, admins_repo):
    token = container.token_service.issue(admins_repo.get_by_username("admin"))
    return {"Authorization": f"Bearer {token}"}
