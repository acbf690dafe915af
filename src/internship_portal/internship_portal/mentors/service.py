from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..departments.repository import DepartmentRepository
from ..departments.service import check_member_scope, resolve_department
from ..internships.repository import InternshipRepository
from ..invites.service import InviteService
from ..provisioning.model import NewMember, ProvisionResult
from ..provisioning.service import ProvisioningService
from ..students.repository import StudentRepository
from ..users.service import SessionUser, require_role
from .model import CollegeMentor
from .repository import MentorRepository


class MentorService:
    """Use case: coordinators manage college mentors."""

    def __init__(
        self,
        mentors: MentorRepository,
        departments: DepartmentRepository,
        students: StudentRepository,
        internships: InternshipRepository,
        provisioning: ProvisioningService,
        invites: InviteService,
    ):
        self._mentors = mentors
        self._departments = departments
        self._students = students
        self._internships = internships
        self._provisioning = provisioning
        self._invites = invites

    def add_mentor(
        self,
        actor: SessionUser,
        *,
        name: str,
        email: str,
        department_id: Optional[str] = None,
        send_invite: bool = True,
        contact: Optional[int] = None,
    ) -> ProvisionResult:
        department = resolve_department(self._departments, actor, department_id)

        member = NewMember(
            role=Role.COLLEGE_MENTOR,
            name=name,
            email=email,
            institute_id=department.institute_id,
            send_invite=send_invite,
            contact=contact,
        )
        return self._provisioning.provision(
            member,
            lambda uid: self._mentors.create(
                uid=uid,
                department_id=department.uid,
                institute_id=department.institute_id,
            ),
        )

    def list_mentors(self, actor: SessionUser) -> Sequence[dict]:
        require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)
        department_id = actor.department_id if actor.role == Role.DEPARTMENT_COORDINATOR else None
        return self._mentors.list_for_scope(institute_id=int(actor.institute_id), department_id=department_id)

    def _get_in_scope(self, actor: SessionUser, user_id: str) -> CollegeMentor:
        require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)
        mentor = self._mentors.get(user_id)
        if not mentor:
            raise ValidationError("Mentor does not exist")
        check_member_scope(
            actor,
            institute_id=mentor.institute_id,
            department_id=mentor.department_id,
            what="Mentor",
        )
        return mentor

    def delete_mentor(self, actor: SessionUser, *, user_id: str) -> int:
        """Delete a mentor; their students are left without a mentor.

        Returns the number of students that were unassigned.
        """
        mentor = self._get_in_scope(actor, user_id)
        if self._internships.count_for_mentor(mentor.uid) > 0:
            raise ValidationError("This mentor still supervises internships")

        unassigned = self._students.unassign_mentor(mentor.uid)
        if not self._mentors.delete(mentor.uid):
            raise ValidationError("Failed to delete mentor")
        self._provisioning.revoke(mentor.uid, Role.COLLEGE_MENTOR)
        return unassigned

    def resend_invite(self, actor: SessionUser, *, user_id: str) -> str:
        mentor = self._get_in_scope(actor, user_id)
        return self._invites.resend(user_id=mentor.uid, role=Role.COLLEGE_MENTOR, institute_id=mentor.institute_id)
