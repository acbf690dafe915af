from __future__ import annotations

import pytest

from fakes import ROLE_IDS, actor_for, build_world, institute_actor
from internship_portal.core.enums import Role
from internship_portal.core.exceptions import AuthorizationError, ValidationError


@pytest.fixture()
def world():
    w = build_world()
    service = w.container.department_service
    w.cs = service.add_department(
        institute_actor(w), department_name="CSE", coordinator_name="Ravi", email="cse@demo.edu"
    ).user_id
    w.mech = service.add_department(
        institute_actor(w), department_name="Mechanical", coordinator_name="Anil", email="mech@demo.edu"
    ).user_id
    return w


def test_institute_coordinator_adds_mentor_to_chosen_department(world):
    result = world.container.mentor_service.add_mentor(
        institute_actor(world), name="Meera", email="meera@demo.edu", department_id=world.mech, contact=9876543210
    )

    mentor = world.mentors.get(result.user_id)
    assert mentor.department_id == world.mech
    assert world.users.get_by_id(result.user_id).contact == 9876543210
    assert world.users.has_role(result.user_id, ROLE_IDS[Role.COLLEGE_MENTOR])


def test_institute_coordinator_must_pick_department(world):
    with pytest.raises(ValidationError, match="select a department"):
        world.container.mentor_service.add_mentor(institute_actor(world), name="Meera", email="meera@demo.edu")


def test_department_coordinator_adds_to_own_department_by_default(world):
    actor = actor_for(world, world.cs, Role.DEPARTMENT_COORDINATOR)

    result = world.container.mentor_service.add_mentor(actor, name="Meera", email="meera@demo.edu")

    assert world.mentors.get(result.user_id).department_id == world.cs


def test_department_coordinator_cannot_add_to_other_department(world):
    actor = actor_for(world, world.cs, Role.DEPARTMENT_COORDINATOR)

    with pytest.raises(AuthorizationError, match="own department"):
        world.container.mentor_service.add_mentor(
            actor, name="Meera", email="meera@demo.edu", department_id=world.mech
        )


def test_department_coordinator_can_also_be_a_mentor(world):
    actor = actor_for(world, world.cs, Role.DEPARTMENT_COORDINATOR)

    result = world.container.mentor_service.add_mentor(actor, name="Ravi", email="cse@demo.edu")

    assert result.user_id == world.cs
    assert result.is_new_user is False
    assert set(world.users.list_roles(world.cs)) == {Role.DEPARTMENT_COORDINATOR, Role.COLLEGE_MENTOR}


def test_list_mentors_is_scoped_for_department_coordinator(world):
    service = world.container.mentor_service
    service.add_mentor(institute_actor(world), name="A", email="a@demo.edu", department_id=world.cs)
    service.add_mentor(institute_actor(world), name="B", email="b@demo.edu", department_id=world.mech)

    assert len(service.list_mentors(institute_actor(world))) == 2
    rows = service.list_mentors(actor_for(world, world.cs, Role.DEPARTMENT_COORDINATOR))
    assert [r["name"] for r in rows] == ["A"]


def test_delete_mentor_unassigns_students(world):
    actor = institute_actor(world)
    mentor = world.container.mentor_service.add_mentor(
        actor, name="Meera", email="meera@demo.edu", department_id=world.cs
    ).user_id
    student = world.container.student_service.add_student(
        actor, name="Kiran", email="kiran@demo.edu", academic_year=3, department_id=world.cs, college_mentor_id=mentor
    ).user_id

    unassigned = world.container.mentor_service.delete_mentor(actor, user_id=mentor)

    assert unassigned == 1
    assert world.students.get(student).college_mentor_id is None
    assert world.mentors.get(mentor) is None
    assert world.users.get_by_id(mentor) is None


def test_delete_mentor_with_internships_is_refused(world):
    actor = institute_actor(world)
    mentor = world.container.mentor_service.add_mentor(
        actor, name="Meera", email="meera@demo.edu", department_id=world.cs
    ).user_id
    world.internships.create(
        student_id="s-1",
        college_mentor_id=mentor,
        company_name="Acme",
        company_address="1 Main St",
        role="Intern",
        field="Software",
        mode="hybrid",
        start_date=None,
        end_date=None,
        internship_letter_url="https://x",
    )

    with pytest.raises(ValidationError, match="supervises internships"):
        world.container.mentor_service.delete_mentor(actor, user_id=mentor)


def test_department_coordinator_cannot_touch_other_departments_mentor(world):
    mentor = world.container.mentor_service.add_mentor(
        institute_actor(world), name="Meera", email="meera@demo.edu", department_id=world.mech
    ).user_id

    with pytest.raises(AuthorizationError):
        world.container.mentor_service.delete_mentor(
            actor_for(world, world.cs, Role.DEPARTMENT_COORDINATOR), user_id=mentor
        )
