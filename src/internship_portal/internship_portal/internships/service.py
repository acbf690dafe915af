from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int, require_email, require_non_empty
from ..core.enums import InternshipMode, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..students.repository import StudentRepository
from ..users.service import SessionUser, require_role
from .model import Internship
from .repository import InternshipRepository

logger = logging.getLogger(__name__)


class InternshipService:
    """Use case: students submit internships, their college mentor approves them."""

    def __init__(self, internships: InternshipRepository, students: StudentRepository):
        self._internships = internships
        self._students = students

    def submit(
        self,
        actor: SessionUser,
        *,
        company_name: str,
        company_address: str,
        role: str,
        field: str,
        mode: str,
        start_date: str,
        end_date: str,
        internship_letter_url: str,
        company_mentor_email: str = "",
        total_holidays: str = "",
    ) -> str:
        require_role(actor, Role.STUDENT)

        student = self._students.get(actor.user_id)
        if not student:
            raise ValidationError("Student profile not found")
        if not student.college_mentor_id:
            raise ValidationError("You have no college mentor assigned yet")

        try:
            mode_e = InternshipMode((mode or "").strip().lower())
        except ValueError:
            raise ValidationError("Mode must be online, offline or hybrid")

        start = parse_iso_date(start_date, "Start date")
        end = parse_iso_date(end_date, "End date")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        holidays = optional_int(total_holidays, "Total holidays")
        if holidays is not None and holidays < 0:
            raise ValidationError("Total holidays cannot be negative")

        mentor_email: Optional[str] = None
        if (company_mentor_email or "").strip():
            mentor_email = require_email(company_mentor_email, "Company mentor email")

        internship_id = self._internships.create(
            student_id=student.uid,
            college_mentor_id=student.college_mentor_id,
            company_name=require_non_empty(company_name, "Company name"),
            company_address=require_non_empty(company_address, "Company address"),
            role=require_non_empty(role, "Role"),
            field=require_non_empty(field, "Field"),
            mode=mode_e,
            start_date=start,
            end_date=end,
            internship_letter_url=require_non_empty(internship_letter_url, "Internship letter URL"),
            company_mentor_email=mentor_email,
            total_holidays=holidays,
        )
        logger.info("internship submitted id=%s student_id=%s", internship_id, student.uid)
        return internship_id

    def list_mine(self, actor: SessionUser) -> Sequence[Internship]:
        require_role(actor, Role.STUDENT)
        return self._internships.list_for_student(actor.user_id)

    def list_for_mentor(self, actor: SessionUser) -> Sequence[dict]:
        require_role(actor, Role.COLLEGE_MENTOR)
        return self._internships.list_for_mentor(actor.user_id)

    def approve(self, actor: SessionUser, *, internship_id: str) -> None:
        require_role(actor, Role.COLLEGE_MENTOR)

        internship = self._internships.get(internship_id)
        if not internship:
            raise ValidationError("Internship does not exist")
        if internship.college_mentor_id != actor.user_id:
            raise AuthorizationError("Only the assigned mentor can approve this internship")
        if internship.approved:
            raise ValidationError("Internship is already approved")

        if not self._internships.approve(internship.id):
            raise ValidationError("Failed to approve internship")

    def approved_covering(self, student_id: str, day: date) -> Optional[Internship]:
        for internship in self._internships.list_for_student(student_id):
            if internship.approved and internship.covers(day):
                return internship
        return None
