from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import DuplicateKeyError, ValidationError
from ..internships.service import InternshipService
from ..users.service import SessionUser, require_role
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        internships: InternshipService,
        *,
        clock: Callable = now_local,
    ):
        self._attendance = attendance
        self._internships = internships
        self._clock = clock

    def mark(self, actor: SessionUser, *, day: str = "", status: str = AttendanceStatus.PRESENT.value) -> str:
        require_role(actor, Role.STUDENT)

        target: date = parse_iso_date(day) if (day or "").strip() else self._clock().date()
        if target > self._clock().date():
            raise ValidationError("Attendance cannot be marked for a future date")

        try:
            status_e = AttendanceStatus((status or "").strip().lower())
        except ValueError:
            raise ValidationError("Status must be present or absent")

        if not self._internships.approved_covering(actor.user_id, target):
            raise ValidationError("No approved internship covers this date")

        try:
            return self._attendance.create(student_id=actor.user_id, day=target, status=status_e)
        except DuplicateKeyError:
            raise ValidationError("Attendance for this date is already marked")

    def list_mine(self, actor: SessionUser, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        require_role(actor, Role.STUDENT)
        if limit is None:
            return self._attendance.list_for_student(actor.user_id)
        return self._attendance.list_for_student(actor.user_id, limit=limit)
