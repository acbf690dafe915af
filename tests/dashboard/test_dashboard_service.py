from __future__ import annotations

from datetime import date

from fakes import actor_for, build_world, institute_actor, make_internship
from internship_portal.core.enums import AttendanceStatus, Role
from internship_portal.core.exceptions import DataAccessError
from internship_portal.users.service import SessionUser


def _cards(dashboard):
    return {c.name: c.total for c in dashboard.cards}


def _populate(world):
    actor = institute_actor(world)
    cs = world.container.department_service.add_department(
        actor, department_name="CSE", coordinator_name="Ravi", email="cse@demo.edu"
    ).user_id
    mech = world.container.department_service.add_department(
        actor, department_name="Mechanical", coordinator_name="Anil", email="mech@demo.edu"
    ).user_id
    mentor = world.container.mentor_service.add_mentor(
        actor, name="Meera", email="meera@demo.edu", department_id=cs
    ).user_id
    students = world.container.student_service
    s1 = students.add_student(
        actor, name="Kiran", email="kiran@demo.edu", academic_year=2, department_id=cs, college_mentor_id=mentor
    ).user_id
    students.add_student(actor, name="Leela", email="leela@demo.edu", academic_year=3, department_id=mech)
    return cs, mentor, s1


def test_institute_dashboard_counts_whole_institute():
    world = build_world()
    _populate(world)

    dashboard = world.container.dashboard_service.for_user(institute_actor(world))

    assert _cards(dashboard) == {"Departments": 2, "Registered College Mentors": 1, "Total Students": 2}
    assert dashboard.name == "Demo Coordinator"


def test_department_dashboard_counts_own_department():
    world = build_world()
    cs, _, _ = _populate(world)

    dashboard = world.container.dashboard_service.for_user(actor_for(world, cs, Role.DEPARTMENT_COORDINATOR))

    assert _cards(dashboard) == {"Registered College Mentors": 1, "Total Students": 1}


def test_mentor_and_student_dashboards():
    world = build_world()
    _, mentor, student = _populate(world)
    world.internships.add(
        make_internship("i-1", student_id=student, college_mentor_id=mentor, start=date(2026, 3, 1), end=date(2026, 5, 1), approved=True)
    )
    world.internships.add(
        make_internship("i-2", student_id=student, college_mentor_id=mentor, start=date(2026, 6, 1), end=date(2026, 7, 1))
    )
    world.attendance.create(student_id=student, day=date(2026, 3, 2), status=AttendanceStatus.PRESENT)
    world.attendance.create(student_id=student, day=date(2026, 3, 3), status=AttendanceStatus.ABSENT)

    mentor_cards = _cards(world.container.dashboard_service.for_user(actor_for(world, mentor, Role.COLLEGE_MENTOR)))
    assert mentor_cards == {
        "Assigned Students": 1,
        "Internships Awaiting Approval": 1,
        "Approved Internships": 1,
    }

    student_cards = _cards(world.container.dashboard_service.for_user(actor_for(world, student, Role.STUDENT)))
    assert student_cards == {"Internships": 2, "Days Present": 1}


def test_failing_count_falls_back_to_zero(caplog):
    world = build_world()
    _populate(world)

    def boom(*args, **kwargs):
        raise DataAccessError("Lost connection to MySQL server")

    world.students.count = boom

    dashboard = world.container.dashboard_service.for_user(institute_actor(world))

    assert _cards(dashboard)["Total Students"] == 0
    assert _cards(dashboard)["Departments"] == 2
    assert "Lost connection" in caplog.text


def test_coordinator_without_institute_gets_empty_dashboard():
    world = build_world()
    world.institutes.institutes.clear()
    actor = actor_for(world, world.coordinator.id, Role.INSTITUTE_COORDINATOR)

    dashboard = world.container.dashboard_service.for_user(actor)

    assert dashboard.cards == []


def test_department_coordinator_without_department_gets_empty_dashboard():
    world = build_world()
    _populate(world)
    actor = SessionUser(
        user_id="dept-gone",
        name="Ravi",
        email="ravi@demo.edu",
        role=Role.DEPARTMENT_COORDINATOR,
        roles=(Role.DEPARTMENT_COORDINATOR,),
        institute_id=1,
    )

    dashboard = world.container.dashboard_service.for_user(actor)

    assert dashboard.cards == []
    assert dashboard.name == "Ravi"
