from __future__ import annotations

import pytest

from fakes import ROLE_IDS, RecordingMailer, build_world
from internship_portal.core.enums import Role
from internship_portal.core.exceptions import ConflictError, DataAccessError, DuplicateKeyError, ValidationError
from internship_portal.provisioning.model import NewMember


def _member(role=Role.COLLEGE_MENTOR, *, name="Asha Rao", email="asha@demo.edu", send_invite=True):
    return NewMember(role=role, name=name, email=email, institute_id=1, send_invite=send_invite)


def test_new_user_is_created_attached_granted_and_invited():
    world = build_world()
    attached = []

    result = world.container.provisioning_service.provision(_member(), attached.append)

    assert result.is_new_user is True
    assert result.invited is True
    assert result.invite_error is None
    assert attached == [result.user_id]
    assert world.users.has_role(result.user_id, ROLE_IDS[Role.COLLEGE_MENTOR])
    assert world.users.get_by_id(result.user_id).is_registered is True
    assert [m["to"] for m in world.mailer.sent] == ["asha@demo.edu"]


def test_email_is_normalized_before_lookup():
    world = build_world()
    provisioning = world.container.provisioning_service

    first = provisioning.provision(_member(email="Asha@Demo.edu"), lambda uid: None)
    second = provisioning.provision(_member(Role.STUDENT, email="asha@demo.edu"), lambda uid: None)

    assert second.user_id == first.user_id
    assert second.is_new_user is False


def test_existing_user_receives_additional_role_without_duplicate_user():
    world = build_world()
    provisioning = world.container.provisioning_service
    first = provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda uid: None)
    users_before = len(world.users.users)

    second = provisioning.provision(_member(Role.COLLEGE_MENTOR), lambda uid: None)

    assert second.user_id == first.user_id
    assert second.is_new_user is False
    assert len(world.users.users) == users_before
    assert set(world.users.list_roles(first.user_id)) == {Role.DEPARTMENT_COORDINATOR, Role.COLLEGE_MENTOR}


def test_person_already_holding_role_is_rejected():
    world = build_world()
    provisioning = world.container.provisioning_service
    provisioning.provision(_member(), lambda uid: None)
    attached = []

    with pytest.raises(ConflictError, match="User is already a college mentor."):
        provisioning.provision(_member(), attached.append)

    assert attached == []


def test_attach_failure_removes_freshly_created_user():
    world = build_world()

    def attach(uid):
        raise DataAccessError("foreign key constraint fails")

    with pytest.raises(DataAccessError):
        world.container.provisioning_service.provision(_member(), attach)

    assert world.users.get_by_email("asha@demo.edu") is None
    assert world.mailer.sent == []


def test_duplicate_attach_row_surfaces_as_conflict_and_rolls_back_new_user():
    world = build_world()

    def attach(uid):
        raise DuplicateKeyError("Duplicate entry")

    with pytest.raises(ConflictError):
        world.container.provisioning_service.provision(_member(), attach)

    assert world.users.get_by_email("asha@demo.edu") is None


def test_attach_failure_keeps_existing_user():
    world = build_world()
    provisioning = world.container.provisioning_service
    first = provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda uid: None)

    def attach(uid):
        raise DataAccessError("connection lost")

    with pytest.raises(DataAccessError):
        provisioning.provision(_member(Role.STUDENT), attach)

    assert world.users.get_by_id(first.user_id) is not None
    assert world.users.list_roles(first.user_id) == [Role.DEPARTMENT_COORDINATOR]


def test_invite_failure_is_reported_but_member_is_kept():
    world = build_world(mailer=RecordingMailer(fail=True))

    result = world.container.provisioning_service.provision(_member(), lambda uid: None)

    assert result.invited is False
    assert "connection refused" in result.invite_error
    assert world.users.has_role(result.user_id, ROLE_IDS[Role.COLLEGE_MENTOR])
    assert world.users.get_by_id(result.user_id).is_registered is False


def test_registered_user_is_not_invited_again():
    world = build_world()
    provisioning = world.container.provisioning_service
    provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda uid: None)

    result = provisioning.provision(_member(Role.COLLEGE_MENTOR), lambda uid: None)

    assert result.invited is False
    assert len(world.mailer.sent) == 1


def test_existing_unregistered_user_is_invited_with_new_role():
    world = build_world()
    provisioning = world.container.provisioning_service
    provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR, send_invite=False), lambda uid: None)

    result = provisioning.provision(_member(Role.COLLEGE_MENTOR), lambda uid: None)

    assert result.is_new_user is False
    assert result.invited is True
    assert len(world.mailer.sent) == 1


def test_no_invite_when_not_requested():
    world = build_world()

    result = world.container.provisioning_service.provision(_member(send_invite=False), lambda uid: None)

    assert result.invited is False
    assert world.mailer.sent == []
    assert world.invites.for_user(result.user_id) == []


@pytest.mark.parametrize(
    "name,email,message",
    [
        ("", "asha@demo.edu", "Name is required"),
        ("Asha", "not-an-email", "Email is not a valid email address"),
    ],
)
def test_invalid_member_is_rejected_before_any_write(name, email, message):
    world = build_world()
    users_before = dict(world.users.users)

    with pytest.raises(ValidationError, match=message):
        world.container.provisioning_service.provision(_member(name=name, email=email), lambda uid: None)

    assert world.users.users == users_before


def test_revoke_deletes_user_only_after_last_role():
    world = build_world()
    provisioning = world.container.provisioning_service
    uid = provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda u: None).user_id
    provisioning.provision(_member(Role.COLLEGE_MENTOR), lambda u: None)

    assert provisioning.revoke(uid, Role.COLLEGE_MENTOR) is False
    assert world.users.get_by_id(uid) is not None

    assert provisioning.revoke(uid, Role.DEPARTMENT_COORDINATOR) is True
    assert world.users.get_by_id(uid) is None


def test_role_grant_failure_removes_new_user_and_retry_succeeds(monkeypatch):
    world = build_world()
    provisioning = world.container.provisioning_service
    grant = world.users.add_role

    def broken_grant(user_id, role_id):
        raise DataAccessError("Lost connection to MySQL server")

    monkeypatch.setattr(world.users, "add_role", broken_grant)
    with pytest.raises(DataAccessError):
        provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda uid: None)
    assert world.users.get_by_email("asha@demo.edu") is None

    monkeypatch.setattr(world.users, "add_role", grant)
    result = provisioning.provision(_member(Role.DEPARTMENT_COORDINATOR), lambda uid: None)

    assert result.is_new_user is True
    assert world.users.list_roles(result.user_id) == [Role.DEPARTMENT_COORDINATOR]


def test_invite_storage_failure_is_reported_but_member_is_kept(monkeypatch):
    world = build_world()

    def locked(**fields):
        raise DataAccessError("invites table locked")

    monkeypatch.setattr(world.invites, "create", locked)
    result = world.container.provisioning_service.provision(_member(), lambda uid: None)

    assert result.invited is False
    assert result.invite_error == "invites table locked"
    assert world.users.has_role(result.user_id, ROLE_IDS[Role.COLLEGE_MENTOR])
    assert world.users.get_by_id(result.user_id).is_registered is False
    assert world.mailer.sent == []
