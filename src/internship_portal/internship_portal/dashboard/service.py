from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import DataAccessError
from ..departments.repository import DepartmentRepository
from ..internships.repository import InternshipRepository
from ..mentors.repository import MentorRepository
from ..students.repository import StudentRepository
from ..users.service import SessionUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardCard:
    name: str
    total: int
    icon: str


@dataclass(frozen=True)
class Dashboard:
    name: str
    subtitle: str
    cards: list = field(default_factory=list)


class DashboardService:
    """Counters shown on each role's landing page."""

    def __init__(
        self,
        departments: DepartmentRepository,
        mentors: MentorRepository,
        students: StudentRepository,
        internships: InternshipRepository,
        attendance: AttendanceRepository,
    ):
        self._departments = departments
        self._mentors = mentors
        self._students = students
        self._internships = internships
        self._attendance = attendance

    @staticmethod
    def _count(label: str, query: Callable[[], int]) -> int:
        # A failing counter must not take the whole page down.
        try:
            return int(query() or 0)
        except DataAccessError as e:
            logger.error("dashboard count %r failed: %s", label, e)
            return 0

    def for_user(self, actor: SessionUser) -> Dashboard:
        builders = {
            Role.INSTITUTE_COORDINATOR: self._institute_coordinator,
            Role.DEPARTMENT_COORDINATOR: self._department_coordinator,
            Role.COLLEGE_MENTOR: self._college_mentor,
            Role.STUDENT: self._student,
        }
        builder = builders.get(actor.role)
        if builder is None:
            return Dashboard(name=actor.name, subtitle="Welcome to your dashboard.")
        return builder(actor)

    def _institute_coordinator(self, actor: SessionUser) -> Dashboard:
        cards = []
        if actor.institute_id is not None:
            institute_id = int(actor.institute_id)
            cards = [
                DashboardCard(
                    "Departments",
                    self._count("departments", lambda: self._departments.count_for_institute(institute_id)),
                    "building",
                ),
                DashboardCard(
                    "Registered College Mentors",
                    self._count("college_mentors", lambda: self._mentors.count(institute_id=institute_id)),
                    "graduation-cap",
                ),
                DashboardCard(
                    "Total Students",
                    self._count("students", lambda: self._students.count(institute_id=institute_id)),
                    "users",
                ),
            ]
        return Dashboard(name=actor.name, subtitle="Welcome to your institute dashboard.", cards=cards)

    def _department_coordinator(self, actor: SessionUser) -> Dashboard:
        cards = []
        # Without a department the counts would widen to the whole institute.
        if actor.institute_id is not None and actor.department_id is not None:
            institute_id = int(actor.institute_id)
            department_id = actor.department_id
            cards = [
                DashboardCard(
                    "Registered College Mentors",
                    self._count(
                        "college_mentors",
                        lambda: self._mentors.count(institute_id=institute_id, department_id=department_id),
                    ),
                    "graduation-cap",
                ),
                DashboardCard(
                    "Total Students",
                    self._count(
                        "students",
                        lambda: self._students.count(institute_id=institute_id, department_id=department_id),
                    ),
                    "users",
                ),
            ]
        return Dashboard(name=actor.name, subtitle="Welcome to your department dashboard.", cards=cards)

    def _college_mentor(self, actor: SessionUser) -> Dashboard:
        uid = actor.user_id
        cards = [
            DashboardCard(
                "Assigned Students",
                self._count("students", lambda: self._students.count(college_mentor_id=uid)),
                "users",
            ),
            DashboardCard(
                "Internships Awaiting Approval",
                self._count("internships", lambda: self._internships.count_for_mentor(uid, approved=False)),
                "clock",
            ),
            DashboardCard(
                "Approved Internships",
                self._count("internships", lambda: self._internships.count_for_mentor(uid, approved=True)),
                "check",
            ),
        ]
        return Dashboard(name=actor.name, subtitle="Welcome to your mentor dashboard.", cards=cards)

    def _student(self, actor: SessionUser) -> Dashboard:
        uid = actor.user_id
        cards = [
            DashboardCard(
                "Internships",
                self._count("internships", lambda: self._internships.count_for_student(uid)),
                "briefcase",
            ),
            DashboardCard(
                "Days Present",
                self._count(
                    "attendance",
                    lambda: self._attendance.count_for_student(uid, status=AttendanceStatus.PRESENT),
                ),
                "calendar",
            ),
        ]
        return Dashboard(name=actor.name, subtitle="Welcome to your student dashboard.", cards=cards)
