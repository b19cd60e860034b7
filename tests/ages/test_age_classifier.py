from __future__ import annotations

from datetime import date

import pytest

from src.dojo_register.dojo_register.ages.classifier import age_range, calculate_age, find_transitions
from src.dojo_register.dojo_register.core.enums import AgeRange, ClassCategory
from src.dojo_register.dojo_register.students.model import Student


def _student(student_id: int, name: str, dob, *, active: bool = True) -> Student:
    return Student(
        student_id=student_id,
        name=name,
        class_category=ClassCategory.JUNIORS,
        date_of_birth=dob,
        active=active,
    )


@pytest.mark.parametrize(
    "age, expected",
    [
        (0, AgeRange.EIGHT_AND_BELOW),
        (8, AgeRange.EIGHT_AND_BELOW),
        (9, AgeRange.NINE_TO_TWELVE),
        (12, AgeRange.NINE_TO_TWELVE),
        (13, AgeRange.THIRTEEN_TO_SEVENTEEN),
        (17, AgeRange.THIRTEEN_TO_SEVENTEEN),
        (18, AgeRange.EIGHTEEN_AND_ABOVE),
        (99, AgeRange.EIGHTEEN_AND_ABOVE),
    ],
)
def test_age_range_boundaries(age, expected):
    assert age_range(age) == expected


def test_age_range_labels():
    assert age_range(8).value == "8 and below"
    assert age_range(10).value == "9-12 years"
    assert age_range(15).value == "13-17 years"
    assert age_range(40).value == "18 and above"


def test_calculate_age_counts_birthday_only_once_reached():
    dob = date(2010, 6, 15)

    assert calculate_age(dob, date(2026, 6, 14)) == 15
    assert calculate_age(dob, date(2026, 6, 15)) == 16
    assert calculate_age(dob, date(2026, 1, 1)) == 15
    assert calculate_age(None, date(2026, 1, 1)) is None


def test_transition_to_nine_reports_both_ranges():
    kid = _student(1, "Kid", date(2017, 3, 15))

    [t] = find_transitions([kid], month=3, year=2026)

    assert t.student is kid
    assert t.turning_age == 9
    assert t.birthday_date == date(2026, 3, 15)
    assert t.current_age_range == AgeRange.EIGHT_AND_BELOW
    assert t.new_age_range == AgeRange.NINE_TO_TWELVE


def test_only_range_boundaries_are_reported():
    students = [
        _student(1, "Turning nine", date(2017, 3, 20)),
        _student(2, "Turning ten", date(2016, 3, 5)),
        _student(3, "Turning thirteen", date(2013, 3, 1)),
        _student(4, "Turning fourteen", date(2012, 3, 9)),
        _student(5, "Turning eighteen", date(2008, 3, 31)),
    ]

    result = find_transitions(students, month=3, year=2026)

    assert [(t.student.name, t.turning_age) for t in result] == [
        ("Turning eighteen", 18),
        ("Turning thirteen", 13),
        ("Turning nine", 9),
    ]
    thirteen = result[1]
    assert thirteen.current_age_range == AgeRange.NINE_TO_TWELVE
    assert thirteen.new_age_range == AgeRange.THIRTEEN_TO_SEVENTEEN


def test_other_months_inactive_and_unknown_birth_dates_are_skipped():
    students = [
        _student(1, "April birthday", date(2017, 4, 2)),
        _student(2, "Retired", date(2017, 3, 2), active=False),
        _student(3, "No birth date", None),
    ]

    assert find_transitions(students, month=3, year=2026) == []


def test_leap_day_birthday_falls_on_28_february():
    [t] = find_transitions([_student(1, "Leapling", date(2008, 2, 29))], month=2, year=2026)

    assert t.turning_age == 18
    assert t.birthday_date == date(2026, 2, 28)
    assert t.current_age_range == AgeRange.THIRTEEN_TO_SEVENTEEN
    assert t.new_age_range == AgeRange.EIGHTEEN_AND_ABOVE


def test_january_birthday_uses_previous_december_for_current_range():
    [t] = find_transitions([_student(1, "New year", date(2013, 1, 1))], month=1, year=2026)

    assert t.current_age_range == AgeRange.NINE_TO_TWELVE
    assert t.new_age_range == AgeRange.THIRTEEN_TO_SEVENTEEN
    assert t.as_dict()["birthday_date"] == "2026-01-01"
