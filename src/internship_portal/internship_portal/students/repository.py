from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def create(
        self,
        *,
        uid: str,
        department_id: str,
        institute_id: int,
        academic_year: int,
        college_mentor_id: Optional[str] = None,
        dob: Optional[date] = None,
    ) -> None:
        raise NotImplementedError

    def get(self, uid: str) -> Optional[Student]:
        raise NotImplementedError

    def list_for_scope(
        self,
        *,
        institute_id: int,
        department_id: Optional[str] = None,
        college_mentor_id: Optional[str] = None,
    ) -> Sequence[dict]:
        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError

    def assign_mentor(self, uid: str, *, college_mentor_id: Optional[str]) -> bool:
        raise NotImplementedError

    def unassign_mentor(self, college_mentor_id: str) -> int:
        """Detach every student from the given mentor; returns affected rows."""

        raise NotImplementedError

    def count(
        self,
        *,
        institute_id: Optional[int] = None,
        department_id: Optional[str] = None,
        college_mentor_id: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
