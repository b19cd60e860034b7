"""Testing age ranges.

Students are graded within four age ranges. A student moves into the next
range on their 9th, 13th and 18th birthday; the admin dashboard lists those
birthdays per month so gradings can be planned.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from ..core.constants import TRANSITION_AGES
from ..core.enums import AgeRange
from ..students.model import Student


@dataclass(frozen=True)
class AgeTransition:
    student: Student
    birthday_date: date
    turning_age: int
    current_age_range: AgeRange
    new_age_range: AgeRange

    def as_dict(self) -> dict[str, Any]:
        s = self.student
        return {
            "id": s.student_id,
            "name": s.name,
            "registration_number": s.registration_number,
            "class_category": s.class_category.value,
            "date_of_birth": s.date_of_birth.isoformat() if s.date_of_birth else None,
            "birthday_date": self.birthday_date.isoformat(),
            "turning_age": self.turning_age,
            "current_age_range": self.current_age_range.value,
            "new_age_range": self.new_age_range.value,
        }


def age_range(age: int) -> AgeRange:
    if age <= 8:
        return AgeRange.EIGHT_AND_BELOW
    if age <= 12:
        return AgeRange.NINE_TO_TWELVE
    if age <= 17:
        return AgeRange.THIRTEEN_TO_SEVENTEEN
    return AgeRange.EIGHTEEN_AND_ABOVE


def calculate_age(date_of_birth: Optional[date], as_of: date) -> Optional[int]:
    """Whole years elapsed, not counting a birthday that has not happened yet."""
    if date_of_birth is None:
        return None
    age = as_of.year - date_of_birth.year
    if (as_of.month, as_of.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def birthday_in(date_of_birth: date, year: int) -> date:
    """The date the birthday is celebrated in ``year`` (29 Feb -> 28 Feb off leap years)."""
    day = min(date_of_birth.day, calendar.monthrange(year, date_of_birth.month)[1])
    return date(year, date_of_birth.month, day)


def find_transitions(students: Iterable[Student], *, month: int, year: int) -> list[AgeTransition]:
    """Students whose birthday in ``month``/``year`` moves them into a new age range.

    Ages are birthday-adjusted like ``calculate_age``: the age carried into the
    month is taken on the day before it starts, the new age on the birthday
    itself. A 29 February birthday is celebrated on the 28th in other years.
    """

    day_before = date(year, month, 1) - timedelta(days=1)

    out: list[AgeTransition] = []
    for s in students:
        if not s.active or s.date_of_birth is None or s.date_of_birth.month != month:
            continue

        birthday = birthday_in(s.date_of_birth, year)
        turning_age = year - s.date_of_birth.year
        if turning_age not in TRANSITION_AGES:
            continue

        previous_age = calculate_age(s.date_of_birth, day_before)
        out.append(
            AgeTransition(
                student=s,
                birthday_date=birthday,
                turning_age=turning_age,
                current_age_range=age_range(previous_age),
                new_age_range=age_range(turning_age),
            )
        )

    out.sort(key=lambda t: (t.student.date_of_birth, t.student.name))
    return out
