from __future__ import annotations

import io
from datetime import date
from typing import Optional, Sequence

import pandas as pd

from ..common.validators import require_int_in_range
from ..core.constants import MAX_ACADEMIC_YEAR, MIN_ACADEMIC_YEAR
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..departments.model import Department
from ..departments.repository import DepartmentRepository
from ..departments.service import check_member_scope, resolve_department
from ..invites.service import InviteService
from ..mentors.repository import MentorRepository
from ..provisioning.model import NewMember, ProvisionResult
from ..provisioning.service import ProvisioningService
from ..users.service import SessionUser, require_role
from .model import Student
from .repository import StudentRepository

EXPORT_COLUMNS = {
    "name": "Name",
    "email": "Email",
    "department_name": "Department",
    "academic_year": "Academic year",
    "roll_no": "Roll no",
    "division": "Division",
    "mentor_name": "College mentor",
    "is_verified": "Registered",
}


class StudentService:
    """Use case: coordinators manage students; mentors view theirs."""

    def __init__(
        self,
        students: StudentRepository,
        departments: DepartmentRepository,
        mentors: MentorRepository,
        provisioning: ProvisioningService,
        invites: InviteService,
    ):
        self._students = students
        self._departments = departments
        self._mentors = mentors
        self._provisioning = provisioning
        self._invites = invites

    def _check_mentor(self, department: Department, college_mentor_id: Optional[str]) -> Optional[str]:
        if not college_mentor_id:
            return None
        mentor = self._mentors.get(college_mentor_id)
        if not mentor or mentor.department_id != department.uid:
            raise ValidationError("Selected mentor does not belong to this department")
        return mentor.uid

    def add_student(
        self,
        actor: SessionUser,
        *,
        name: str,
        email: str,
        academic_year,
        department_id: Optional[str] = None,
        college_mentor_id: Optional[str] = None,
        send_invite: bool = True,
        contact: Optional[int] = None,
        dob: Optional[date] = None,
    ) -> ProvisionResult:
        department = resolve_department(self._departments, actor, department_id)
        year = require_int_in_range(academic_year, "Academic year", MIN_ACADEMIC_YEAR, MAX_ACADEMIC_YEAR)
        mentor_id = self._check_mentor(department, college_mentor_id)

        member = NewMember(
            role=Role.STUDENT,
            name=name,
            email=email,
            institute_id=department.institute_id,
            send_invite=send_invite,
            contact=contact,
        )
        return self._provisioning.provision(
            member,
            lambda uid: self._students.create(
                uid=uid,
                department_id=department.uid,
                institute_id=department.institute_id,
                academic_year=year,
                college_mentor_id=mentor_id,
                dob=dob,
            ),
        )

    def list_students(self, actor: SessionUser) -> Sequence[dict]:
        require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR, Role.COLLEGE_MENTOR)
        if actor.role == Role.COLLEGE_MENTOR:
            return self._students.list_for_scope(institute_id=int(actor.institute_id), college_mentor_id=actor.user_id)
        department_id = actor.department_id if actor.role == Role.DEPARTMENT_COORDINATOR else None
        return self._students.list_for_scope(institute_id=int(actor.institute_id), department_id=department_id)

    def _get_in_scope(self, actor: SessionUser, user_id: str) -> Student:
        require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)
        student = self._students.get(user_id)
        if not student:
            raise ValidationError("Student does not exist")
        check_member_scope(
            actor,
            institute_id=student.institute_id,
            department_id=student.department_id,
            what="Student",
        )
        return student

    def assign_mentor(self, actor: SessionUser, *, student_id: str, college_mentor_id: Optional[str]) -> None:
        student = self._get_in_scope(actor, student_id)
        department = self._departments.get(student.department_id)
        if not department:
            raise ValidationError("Department does not exist")
        mentor_id = self._check_mentor(department, college_mentor_id)
        if not self._students.assign_mentor(student.uid, college_mentor_id=mentor_id):
            raise ValidationError("Failed to update student")

    def delete_student(self, actor: SessionUser, *, user_id: str) -> None:
        student = self._get_in_scope(actor, user_id)
        if not self._students.delete(student.uid):
            raise ValidationError("Failed to delete student")
        self._provisioning.revoke(student.uid, Role.STUDENT)

    def resend_invite(self, actor: SessionUser, *, user_id: str) -> str:
        student = self._get_in_scope(actor, user_id)
        return self._invites.resend(user_id=student.uid, role=Role.STUDENT, institute_id=student.institute_id)

    def export_students(self, actor: SessionUser) -> bytes:
        """Student roster in the actor's scope as an .xlsx workbook."""
        rows = self.list_students(actor)
        df = pd.DataFrame(list(rows), columns=list(EXPORT_COLUMNS))
        df["is_verified"] = df["is_verified"].map(lambda v: "Yes" if v else "No")
        df = df.rename(columns=EXPORT_COLUMNS)

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Students")
        return out.getvalue()
