from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ClassCategory
from .model import StudentClassCount


class ReportRepository(Protocol):
    def get_class_counts(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[ClassCategory] = None,
    ) -> Sequence[StudentClassCount]:
        """Every active student with its attendance count inside the date range.

        Students without attendance are included with a count of zero.
        Without a range, all attendance is counted.
        """

        raise NotImplementedError
