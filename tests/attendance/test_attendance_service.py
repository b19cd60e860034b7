from __future__ import annotations

from datetime import date

import pytest

from src.dojo_register.dojo_register.attendance.service import AttendanceService
from src.dojo_register.dojo_register.core.enums import ClassCategory
from src.dojo_register.dojo_register.core.exceptions import ConflictError, NotFoundError, ValidationError

TODAY = date(2026, 3, 10)


@pytest.fixture
def service(attendance_repo, students_repo):
    return AttendanceService(attendance_repo, students_repo)


def test_sign_in_creates_entry_for_today(service, students_repo, attendance_repo):
    student = students_repo.add("Ana Lima")

    result = service.sign_in(student.student_id, today=TODAY)

    assert result.student == student
    assert result.attendance.student_id == student.student_id
    assert result.attendance.attendance_date == TODAY
    assert len(attendance_repo.entries) == 1


def test_second_sign_in_same_day_conflicts_and_keeps_one_entry(service, students_repo, attendance_repo):
    student = students_repo.add("Ana Lima")
    service.sign_in(student.student_id, today=TODAY)

    with pytest.raises(ConflictError) as exc:
        service.sign_in(student.student_id, today=TODAY)

    assert len(attendance_repo.entries) == 1
    assert str(exc.value) == "Attendance already logged for today"
    assert exc.value.payload["student"]["id"] == student.student_id
    assert exc.value.payload["student"]["name"] == "Ana Lima"


def test_sign_in_next_day_is_allowed(service, students_repo, attendance_repo):
    student = students_repo.add("Ana Lima")
    service.sign_in(student.student_id, today=date(2026, 3, 10))
    service.sign_in(student.student_id, today=date(2026, 3, 11))

    assert len(attendance_repo.entries) == 2


def test_sign_in_accepts_numeric_string(service, students_repo):
    student = students_repo.add("Ana Lima")

    result = service.sign_in(str(student.student_id), today=TODAY)

    assert result.attendance.student_id == student.student_id


@pytest.mark.parametrize("student_id", [999, None])
def test_sign_in_unknown_or_missing_student(service, attendance_repo, student_id):
    expected = NotFoundError if student_id else ValidationError
    with pytest.raises(expected):
        service.sign_in(student_id, today=TODAY)

    assert attendance_repo.entries == {}


def test_sign_in_inactive_student_is_not_found(service, students_repo, attendance_repo):
    student = students_repo.add("Retired", active=False)

    with pytest.raises(NotFoundError):
        service.sign_in(student.student_id, today=TODAY)

    assert attendance_repo.entries == {}


def test_sign_in_rejects_non_integer_id(service):
    with pytest.raises(ValidationError):
        service.sign_in("abc", today=TODAY)


@pytest.mark.parametrize("student_id", [1.9, "1.9", [1]])
def test_sign_in_rejects_fractional_or_malformed_id(service, students_repo, attendance_repo, student_id):
    students_repo.add("Ana Lima")

    with pytest.raises(ValidationError):
        service.sign_in(student_id, today=TODAY)

    assert attendance_repo.entries == {}


def test_sign_in_accepts_whole_float_id(service, students_repo):
    student = students_repo.add("Ana Lima")

    result = service.sign_in(float(student.student_id), today=TODAY)

    assert result.attendance.student_id == student.student_id


def test_list_entries_combines_month_and_date_range(service, students_repo, attendance_repo):
    ana = students_repo.add("Ana", ClassCategory.JUNIORS)
    ben = students_repo.add("Ben", ClassCategory.ADULTS)
    attendance_repo.add_many(ana.student_id, [date(2026, 2, 27), date(2026, 3, 2), date(2026, 3, 20)])
    attendance_repo.add_many(ben.student_id, [date(2026, 3, 2), date(2026, 4, 1)])

    rows = service.list_entries(month="3", year="2026", end_date="2026-03-15")

    assert [(r.entry.attendance_date, r.name) for r in rows] == [
        (date(2026, 3, 2), "Ana"),
        (date(2026, 3, 2), "Ben"),
    ]
    assert rows[0].as_dict()["class_category"] == "Juniors"


def test_list_entries_sorted_by_date_descending(service, students_repo, attendance_repo):
    ana = students_repo.add("Ana")
    attendance_repo.add_many(ana.student_id, [date(2026, 3, 1), date(2026, 3, 5), date(2026, 3, 3)])

    rows = service.list_entries(student_id=ana.student_id)

    assert [r.entry.attendance_date.day for r in rows] == [5, 3, 1]


def test_list_entries_rejects_bad_dates_and_half_periods(service):
    with pytest.raises(ValidationError):
        service.list_entries(start_date="10/03/2026")
    with pytest.raises(ValidationError):
        service.list_entries(month="3")


def test_delete_entry(service, students_repo, attendance_repo):
    ana = students_repo.add("Ana")
    entry = attendance_repo.create(student_id=ana.student_id, attendance_date=TODAY)

    service.delete_entry(entry.attendance_id)

    assert attendance_repo.entries == {}
    with pytest.raises(NotFoundError):
        service.delete_entry(entry.attendance_id)
