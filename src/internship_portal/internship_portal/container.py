from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .institutes.mysql_institute_repository import MySQLInstituteRepository
from .internships.mysql_internship_repository import MySQLInternshipRepository
from .internships.service import InternshipService
from .invites.mailer import build_mailer
from .invites.mysql_invite_repository import MySQLInviteRepository
from .invites.service import InviteService
from .mentors.mysql_mentor_repository import MySQLMentorRepository
from .mentors.service import MentorService
from .notes.mysql_note_repository import MySQLNoteRepository
from .notes.service import NoteService
from .provisioning.service import ProvisioningService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLRoleRepository, MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    invite_service: InviteService
    provisioning_service: ProvisioningService
    department_service: DepartmentService
    mentor_service: MentorService
    student_service: StudentService
    dashboard_service: DashboardService
    internship_service: InternshipService
    attendance_service: AttendanceService
    note_service: NoteService


def build_container(
    *,
    db_config: dict,
    smtp_config: dict,
    invite_base_url: str,
    invite_ttl_hours: int,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    roles_repo = MySQLRoleRepository(conn)
    institutes_repo = MySQLInstituteRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    mentors_repo = MySQLMentorRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    internships_repo = MySQLInternshipRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    invites_repo = MySQLInviteRepository(conn)
    notes_repo = MySQLNoteRepository(conn)

    invite_service = InviteService(
        invites_repo,
        users_repo,
        roles_repo,
        build_mailer(smtp_config),
        base_url=invite_base_url,
        ttl_hours=invite_ttl_hours,
    )
    provisioning_service = ProvisioningService(users_repo, roles_repo, invite_service)
    internship_service = InternshipService(internships_repo, students_repo)

    return Container(
        auth_service=AuthService(users_repo, institutes_repo, departments_repo, mentors_repo, students_repo),
        invite_service=invite_service,
        provisioning_service=provisioning_service,
        department_service=DepartmentService(
            departments_repo, mentors_repo, students_repo, provisioning_service, invite_service
        ),
        mentor_service=MentorService(
            mentors_repo, departments_repo, students_repo, internships_repo, provisioning_service, invite_service
        ),
        student_service=StudentService(
            students_repo, departments_repo, mentors_repo, provisioning_service, invite_service
        ),
        dashboard_service=DashboardService(
            departments_repo, mentors_repo, students_repo, internships_repo, attendance_repo
        ),
        internship_service=internship_service,
        attendance_service=AttendanceService(attendance_repo, internship_service),
        note_service=NoteService(notes_repo),
    )
