from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import InternshipMode
from .model import Internship


class InternshipRepository(Protocol):
    def create(
        self,
        *,
        student_id: str,
        college_mentor_id: str,
        company_name: str,
        company_address: str,
        role: str,
        field: str,
        mode: InternshipMode,
        start_date: date,
        end_date: date,
        internship_letter_url: str,
        company_mentor_email: Optional[str] = None,
        total_holidays: Optional[int] = None,
    ) -> str:
        raise NotImplementedError

    def get(self, internship_id: str) -> Optional[Internship]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[Internship]:
        raise NotImplementedError

    def list_for_mentor(self, college_mentor_id: str) -> Sequence[dict]:
        """Return UI rows (joined with the student's user row)."""

        raise NotImplementedError

    def approve(self, internship_id: str) -> bool:
        raise NotImplementedError

    def count_for_mentor(self, college_mentor_id: str, *, approved: Optional[bool] = None) -> int:
        raise NotImplementedError

    def count_for_student(self, student_id: str) -> int:
        raise NotImplementedError
