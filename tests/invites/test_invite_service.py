from __future__ import annotations

from datetime import timedelta

import pytest
from werkzeug.security import check_password_hash

from fakes import ROLE_IDS, build_world
from internship_portal.core.enums import Role
from internship_portal.core.exceptions import AuthenticationError, ValidationError
from internship_portal.invites.service import InviteService


def _invited_user(world, *, email="mentor@demo.edu"):
    uid = world.users.create_user(name="Meera", email=email)
    world.users.add_role(uid, ROLE_IDS[Role.COLLEGE_MENTOR])
    token = world.container.invite_service.send_invite(
        user_id=uid,
        email=email,
        name="Meera",
        role=Role.COLLEGE_MENTOR,
        institute_id=1,
    )
    return uid, token


def test_send_invite_stores_token_and_emails_link():
    world = build_world()

    uid, token = _invited_user(world)

    invite = world.invites.get(token)
    assert invite.user_id == uid
    assert invite.role_id == ROLE_IDS[Role.COLLEGE_MENTOR]
    assert invite.expires_at == world.now + timedelta(hours=72)

    mail = world.mailer.sent[0]
    assert mail["to"] == "mentor@demo.edu"
    assert f"http://testserver/invites/{token}" in mail["body"]
    assert "college mentor" in mail["body"]

    user = world.users.get_by_id(uid)
    assert user.is_registered is True
    assert user.auth_id
    assert user.is_verified is False


def test_accept_sets_password_and_verifies_user():
    world = build_world()
    uid, token = _invited_user(world)

    world.container.invite_service.accept(token, password="s3cret-pass", confirm="s3cret-pass")

    user = world.users.get_by_id(uid)
    assert user.is_verified is True
    assert check_password_hash(user.password_hash, "s3cret-pass")
    assert world.invites.get(token).used_at == world.now


def test_token_cannot_be_used_twice():
    world = build_world()
    _, token = _invited_user(world)
    service = world.container.invite_service
    service.accept(token, password="s3cret-pass", confirm="s3cret-pass")

    with pytest.raises(AuthenticationError):
        service.accept(token, password="another-pass", confirm="another-pass")


def test_expired_token_is_rejected():
    world = build_world()
    _, token = _invited_user(world)
    later = InviteService(
        world.invites,
        world.users,
        world.roles,
        world.mailer,
        base_url="http://testserver",
        clock=lambda: world.now + timedelta(hours=73),
    )

    with pytest.raises(AuthenticationError, match="invalid or has expired"):
        later.get_pending(token)


def test_unknown_token_is_rejected():
    world = build_world()

    with pytest.raises(AuthenticationError):
        world.container.invite_service.get_pending("nope")


@pytest.mark.parametrize(
    "password,confirm,message",
    [
        ("short", "short", "at least 8 characters"),
        ("long-enough-1", "long-enough-2", "Passwords do not match"),
    ],
)
def test_accept_validates_password(password, confirm, message):
    world = build_world()
    uid, token = _invited_user(world)

    with pytest.raises(ValidationError, match=message):
        world.container.invite_service.accept(token, password=password, confirm=confirm)

    assert world.invites.get(token).used_at is None
    assert world.users.get_by_id(uid).is_verified is False


def test_resend_issues_a_fresh_token():
    world = build_world()
    uid, first = _invited_user(world)

    second = world.container.invite_service.resend(user_id=uid, role=Role.COLLEGE_MENTOR, institute_id=1)

    assert second != first
    assert len(world.mailer.sent) == 2


def test_resend_refused_once_user_is_verified():
    world = build_world()
    uid, token = _invited_user(world)
    service = world.container.invite_service
    service.accept(token, password="s3cret-pass", confirm="s3cret-pass")

    with pytest.raises(ValidationError, match="already accepted"):
        service.resend(user_id=uid, role=Role.COLLEGE_MENTOR, institute_id=1)


def test_resend_closes_the_earlier_link():
    world = build_world()
    uid, first = _invited_user(world)
    service = world.container.invite_service
    second = service.resend(user_id=uid, role=Role.COLLEGE_MENTOR, institute_id=1)

    service.accept(second, password="password-one", confirm="password-one")

    with pytest.raises(AuthenticationError):
        service.accept(first, password="other-pass", confirm="other-pass")
    assert check_password_hash(world.users.get_by_id(uid).password_hash, "password-one")
    assert world.invites.get(first).used_at is not None


def test_link_of_verified_user_is_rejected():
    world = build_world()
    uid, token = _invited_user(world)
    world.users.set_password(uid, password_hash="set-elsewhere")

    with pytest.raises(AuthenticationError):
        world.container.invite_service.get_pending(token)
    assert world.users.get_by_id(uid).password_hash == "set-elsewhere"
