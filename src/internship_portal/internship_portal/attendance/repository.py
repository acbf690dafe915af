from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create(self, *, student_id: str, day: date, status: AttendanceStatus) -> str:
        """Insert one record; raises `DuplicateKeyError` if the day is already marked."""

        raise NotImplementedError

    def list_for_student(self, student_id: str, *, limit: int = 60) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_student(self, student_id: str, *, status: Optional[AttendanceStatus] = None) -> int:
        raise NotImplementedError
