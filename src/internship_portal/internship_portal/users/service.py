from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_email
from ..core.enums import ROLE_PRIORITY, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..departments.repository import DepartmentRepository
from ..institutes.repository import InstituteRepository
from ..mentors.repository import MentorRepository
from ..students.repository import StudentRepository
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    email: str
    role: Role
    roles: tuple = field(default_factory=tuple)
    institute_id: Optional[int] = None
    department_id: Optional[str] = None

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "roles": [r.value for r in self.roles],
            "institute_id": self.institute_id,
            "department_id": self.department_id,
        }

    @classmethod
    def from_session(cls, data: Mapping) -> "SessionUser":
        return cls(
            user_id=data["user_id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=Role(data["role"]),
            roles=tuple(Role(r) for r in data.get("roles", [])),
            institute_id=data.get("institute_id"),
            department_id=data.get("department_id"),
        )


def require_role(actor: SessionUser, *roles: Role) -> None:
    if actor.role not in roles:
        raise AuthorizationError("You do not have permission to do this")
    if actor.institute_id is None:
        raise AuthorizationError("Your account is not linked to an institute")


class AuthService:
    """Use case: authenticate a user and resolve the scope of their active role."""

    def __init__(
        self,
        users: UserRepository,
        institutes: InstituteRepository,
        departments: DepartmentRepository,
        mentors: MentorRepository,
        students: StudentRepository,
    ):
        self._users = users
        self._institutes = institutes
        self._departments = departments
        self._mentors = mentors
        self._students = students

    def authenticate(self, email: str, password: str) -> SessionUser:
        try:
            email = require_email(email)
        except ValidationError:
            raise AuthenticationError("Invalid email or password")

        user = self._users.get_by_email(email)
        if not user or not user.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. corrupted or placeholder hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")
        if not user.is_verified:
            raise AuthenticationError("Please accept your invitation email first")

        return self.build_session_user(user)

    def switch_role(self, user_id: str, role: Role) -> SessionUser:
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Your session has expired, please log in again")
        return self.build_session_user(user, active_role=role)

    def build_session_user(self, user: User, *, active_role: Optional[Role] = None) -> SessionUser:
        held: Sequence[Role] = self._users.list_roles(user.id)
        if not held:
            raise AuthorizationError("Your account has no role assigned yet")

        roles = tuple(r for r in ROLE_PRIORITY if r in held)
        if active_role is None:
            role = roles[0]
        elif active_role in roles:
            role = active_role
        else:
            raise AuthorizationError("You do not hold this role")

        institute_id, department_id = self._resolve_scope(user.id, role)
        return SessionUser(
            user_id=user.id,
            name=user.name,
            email=user.email,
            role=role,
            roles=roles,
            institute_id=institute_id,
            department_id=department_id,
        )

    def _resolve_scope(self, user_id: str, role: Role) -> tuple[Optional[int], Optional[str]]:
        if role == Role.INSTITUTE_COORDINATOR:
            institute = self._institutes.get_by_coordinator(user_id)
            return (institute.institute_id if institute else None), None

        if role == Role.DEPARTMENT_COORDINATOR:
            department = self._departments.get(user_id)
            return (department.institute_id if department else None), (department.uid if department else None)

        if role == Role.COLLEGE_MENTOR:
            mentor = self._mentors.get(user_id)
            return (mentor.institute_id if mentor else None), (mentor.department_id if mentor else None)

        if role == Role.STUDENT:
            student = self._students.get(user_id)
            return (student.institute_id if student else None), (student.department_id if student else None)

        return None, None
