from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..invites.service import InviteService
from ..mentors.repository import MentorRepository
from ..provisioning.model import NewMember, ProvisionResult
from ..provisioning.service import ProvisioningService
from ..students.repository import StudentRepository
from ..users.service import SessionUser, require_role
from .model import Department
from .repository import DepartmentRepository


def resolve_department(
    departments: DepartmentRepository,
    actor: SessionUser,
    department_id: Optional[str],
) -> Department:
    """Pick the department a coordinator acts on.

    Department coordinators always act on their own department; institute
    coordinators must name one that belongs to their institute.
    """
    require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)

    if actor.role == Role.DEPARTMENT_COORDINATOR:
        if department_id and department_id != actor.department_id:
            raise AuthorizationError("You can only manage your own department")
        department_id = actor.department_id

    if not department_id:
        raise ValidationError("Please select a department")

    department = departments.get(department_id)
    if not department or department.institute_id != actor.institute_id:
        raise ValidationError("Department does not exist")
    return department


def check_member_scope(actor: SessionUser, *, institute_id: int, department_id: str, what: str) -> None:
    if institute_id != actor.institute_id:
        raise ValidationError(f"{what} does not exist")
    if actor.role == Role.DEPARTMENT_COORDINATOR and department_id != actor.department_id:
        raise AuthorizationError("You can only manage your own department")


class DepartmentService:
    """Use case: institute coordinators manage departments and their coordinators."""

    def __init__(
        self,
        departments: DepartmentRepository,
        mentors: MentorRepository,
        students: StudentRepository,
        provisioning: ProvisioningService,
        invites: InviteService,
    ):
        self._departments = departments
        self._mentors = mentors
        self._students = students
        self._provisioning = provisioning
        self._invites = invites

    def add_department(
        self,
        actor: SessionUser,
        *,
        department_name: str,
        coordinator_name: str,
        email: str,
        send_invite: bool = True,
    ) -> ProvisionResult:
        require_role(actor, Role.INSTITUTE_COORDINATOR)
        department_name = require_non_empty(department_name, "Department name")
        institute_id = int(actor.institute_id)

        member = NewMember(
            role=Role.DEPARTMENT_COORDINATOR,
            name=coordinator_name,
            email=email,
            institute_id=institute_id,
            send_invite=send_invite,
        )
        return self._provisioning.provision(
            member,
            lambda uid: self._departments.create(uid=uid, name=department_name, institute_id=institute_id),
        )

    def list_departments(self, actor: SessionUser) -> Sequence[dict]:
        require_role(actor, Role.INSTITUTE_COORDINATOR, Role.DEPARTMENT_COORDINATOR)
        return self._departments.list_for_institute(int(actor.institute_id))

    def list_choices(self, actor: SessionUser) -> Sequence[dict]:
        """Departments the actor may pick from in a form."""
        rows = self.list_departments(actor)
        if actor.role == Role.DEPARTMENT_COORDINATOR:
            return [r for r in rows if r["uid"] == actor.department_id]
        return rows

    def delete_department(self, actor: SessionUser, *, user_id: str) -> None:
        require_role(actor, Role.INSTITUTE_COORDINATOR)

        department = self._departments.get(user_id)
        if not department or department.institute_id != actor.institute_id:
            raise ValidationError("Department does not exist")

        institute_id = int(actor.institute_id)
        if self._mentors.count(institute_id=institute_id, department_id=department.uid) > 0:
            raise ValidationError("Remove the department's mentors before deleting it")
        if self._students.count(institute_id=institute_id, department_id=department.uid) > 0:
            raise ValidationError("Remove the department's students before deleting it")

        if not self._departments.delete(department.uid):
            raise ValidationError("Failed to delete department")
        self._provisioning.revoke(department.uid, Role.DEPARTMENT_COORDINATOR)

    def resend_invite(self, actor: SessionUser, *, user_id: str) -> str:
        require_role(actor, Role.INSTITUTE_COORDINATOR)
        department = self._departments.get(user_id)
        if not department or department.institute_id != actor.institute_id:
            raise ValidationError("Department does not exist")
        return self._invites.resend(
            user_id=department.uid,
            role=Role.DEPARTMENT_COORDINATOR,
            institute_id=department.institute_id,
        )
