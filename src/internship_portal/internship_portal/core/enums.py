from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles stored in the `roles` table, by name."""

    INSTITUTE_COORDINATOR = "institute-coordinator"
    DEPARTMENT_COORDINATOR = "department-coordinator"
    COLLEGE_MENTOR = "college-mentor"
    COMPANY_MENTOR = "company-mentor"
    STUDENT = "student"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


# Highest privilege first; used to pick a default dashboard after login.
ROLE_PRIORITY = (
    Role.INSTITUTE_COORDINATOR,
    Role.DEPARTMENT_COORDINATOR,
    Role.COLLEGE_MENTOR,
    Role.COMPANY_MENTOR,
    Role.STUDENT,
)


class InternshipMode(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
