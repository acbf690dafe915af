from __future__ import annotations

from datetime import date

import pytest

from fakes import actor_for, build_world, institute_actor, make_internship
from internship_portal.core.enums import InternshipMode, Role
from internship_portal.core.exceptions import AuthorizationError, ValidationError


@pytest.fixture()
def world():
    w = build_world()
    actor = institute_actor(w)
    cs = w.container.department_service.add_department(
        actor, department_name="CSE", coordinator_name="Ravi", email="cse@demo.edu"
    ).user_id
    w.mentor = w.container.mentor_service.add_mentor(actor, name="Meera", email="meera@demo.edu", department_id=cs).user_id
    w.other_mentor = w.container.mentor_service.add_mentor(
        actor, name="Vikram", email="vikram@demo.edu", department_id=cs
    ).user_id
    w.student = w.container.student_service.add_student(
        actor, name="Kiran", email="kiran@demo.edu", academic_year=3, department_id=cs, college_mentor_id=w.mentor
    ).user_id
    w.orphan = w.container.student_service.add_student(
        actor, name="Leela", email="leela@demo.edu", academic_year=3, department_id=cs
    ).user_id
    return w


def _form(**overrides):
    form = dict(
        company_name="Acme",
        company_address="1 Main St",
        role="Backend intern",
        field="Software",
        mode="Hybrid",
        start_date="2026-03-01",
        end_date="2026-05-31",
        internship_letter_url="https://files.example.com/letter.pdf",
        company_mentor_email="",
        total_holidays="4",
    )
    form.update(overrides)
    return form


def test_student_submits_internship_for_their_mentor(world):
    actor = actor_for(world, world.student, Role.STUDENT)

    internship_id = world.container.internship_service.submit(actor, **_form(company_mentor_email="Boss@Acme.com"))

    internship = world.internships.get(internship_id)
    assert internship.college_mentor_id == world.mentor
    assert internship.mode == InternshipMode.HYBRID
    assert internship.start_date == date(2026, 3, 1)
    assert internship.total_holidays == 4
    assert internship.company_mentor_email == "boss@acme.com"
    assert internship.approved is False


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"mode": "remote"}, "Mode must be"),
        ({"end_date": "2026-02-01"}, "before start date"),
        ({"start_date": "03/01/2026"}, "Start date is not a valid date"),
        ({"company_name": ""}, "Company name is required"),
        ({"total_holidays": "-1"}, "cannot be negative"),
        ({"company_mentor_email": "boss"}, "Company mentor email"),
    ],
)
def test_submit_validates_form(world, overrides, message):
    actor = actor_for(world, world.student, Role.STUDENT)

    with pytest.raises(ValidationError, match=message):
        world.container.internship_service.submit(actor, **_form(**overrides))


def test_student_without_mentor_cannot_submit(world):
    actor = actor_for(world, world.orphan, Role.STUDENT)

    with pytest.raises(ValidationError, match="no college mentor"):
        world.container.internship_service.submit(actor, **_form())


def test_assigned_mentor_approves(world):
    service = world.container.internship_service
    internship_id = service.submit(actor_for(world, world.student, Role.STUDENT), **_form())

    service.approve(actor_for(world, world.mentor, Role.COLLEGE_MENTOR), internship_id=internship_id)

    assert world.internships.get(internship_id).approved is True
    with pytest.raises(ValidationError, match="already approved"):
        service.approve(actor_for(world, world.mentor, Role.COLLEGE_MENTOR), internship_id=internship_id)


def test_other_mentor_cannot_approve(world):
    service = world.container.internship_service
    internship_id = service.submit(actor_for(world, world.student, Role.STUDENT), **_form())

    with pytest.raises(AuthorizationError):
        service.approve(actor_for(world, world.other_mentor, Role.COLLEGE_MENTOR), internship_id=internship_id)


def test_approved_covering_ignores_pending_and_out_of_range(world):
    world.internships.add(
        make_internship("i-1", student_id=world.student, college_mentor_id=world.mentor, start=date(2026, 1, 1), end=date(2026, 1, 31), approved=True)
    )
    world.internships.add(
        make_internship("i-2", student_id=world.student, college_mentor_id=world.mentor, start=date(2026, 3, 1), end=date(2026, 3, 31))
    )
    service = world.container.internship_service

    assert service.approved_covering(world.student, date(2026, 1, 31)).id == "i-1"
    assert service.approved_covering(world.student, date(2026, 3, 5)) is None
