from __future__ import annotations

from typing import Any, Optional, Sequence

from ..ages.classifier import AgeTransition, find_transitions
from ..common.datetime_utils import month_bounds
from ..common.validators import parse_category, parse_month_year
from ..core.enums import ClassCategory
from ..students.repository import StudentRepository
from .model import CategoryStats, StudentClassCount
from .repository import ReportRepository


def _by_category_then_name(row: StudentClassCount):
    return (row.student.class_category.value, row.student.name)


class ReportService:
    """Monthly reports for the admin dashboard.

    Every report works on active students only. ``month``/``year`` arrive as
    raw query-string values and are validated here.
    """

    def __init__(self, reports: ReportRepository, students: StudentRepository):
        self._reports = reports
        self._students = students

    def _class_counts(
        self,
        period: Optional[tuple[int, int]],
        category: Optional[ClassCategory] = None,
    ) -> list[StudentClassCount]:
        start = end = None
        if period:
            start, end = month_bounds(*period)
        return list(self._reports.get_class_counts(start_date=start, end_date=end, category=category))

    def by_student(self, *, month: Any = None, year: Any = None, category: Optional[str] = None) -> list[StudentClassCount]:
        period = parse_month_year(month, year)
        cat = parse_category(category) if category else None
        rows = self._class_counts(period, cat)
        rows.sort(key=_by_category_then_name)
        return rows

    def category_stats(self, *, month: Any = None, year: Any = None) -> list[CategoryStats]:
        period = parse_month_year(month, year)

        totals: dict[ClassCategory, list[int]] = {}
        for row in self._class_counts(period):
            bucket = totals.setdefault(row.student.class_category, [0, 0])
            bucket[0] += 1
            bucket[1] += row.total_classes

        stats = [
            CategoryStats(
                class_category=category,
                total_students=students,
                total_attendances=attendances,
                avg_classes_per_student=round(attendances / students, 2) if students else 0.0,
            )
            for category, (students, attendances) in totals.items()
        ]
        stats.sort(key=lambda s: s.class_category.value)
        return stats

    def over_allocation(self, *, month: Any = None, year: Any = None) -> list[StudentClassCount]:
        period = parse_month_year(month, year, required=True)
        rows = [r for r in self._class_counts(period) if r.total_classes > r.student.monthly_lessons]
        rows.sort(key=lambda r: (r.student.class_category.value, -r.over_by, r.student.name))
        return rows

    def age_transitions(self, *, month: Any = None, year: Any = None) -> Sequence[AgeTransition]:
        m, y = parse_month_year(month, year, required=True)
        return find_transitions(self._students.list(active=True), month=m, year=y)
