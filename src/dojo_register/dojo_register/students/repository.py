from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ClassCategory
from .model import Student, StudentDraft


class StudentRepository(Protocol):
    """Repository interface for Student.

    Note: the service layer depends on this interface, not on a concrete DB.
    Implementations raise ConflictError when the registration number is taken.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_active_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_registration_number(self, registration_number: str) -> Optional[Student]:
        raise NotImplementedError

    def list(
        self,
        *,
        category: Optional[ClassCategory] = None,
        active: Optional[bool] = None,
    ) -> Sequence[Student]:
        raise NotImplementedError

    def search_active(self, term: str, *, limit: int) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, draft: StudentDraft) -> int:
        raise NotImplementedError

    def update(self, student_id: int, draft: StudentDraft) -> bool:
        raise NotImplementedError

    def set_active(self, student_id: int, *, active: bool) -> bool:
        raise NotImplementedError
