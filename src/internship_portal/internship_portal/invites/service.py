from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length
from ..core.constants import DEFAULT_INVITE_TTL_HOURS, INVITE_TOKEN_BYTES, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..database.mysql_base import new_id
from ..users.model import User
from ..users.repository import RoleRepository, UserRepository
from .mailer import Mailer
from .model import Invite
from .repository import InviteRepository

logger = logging.getLogger(__name__)


class InviteService:
    """Use case: invite users by email and let them set a password."""

    def __init__(
        self,
        invites: InviteRepository,
        users: UserRepository,
        roles: RoleRepository,
        mailer: Mailer,
        *,
        base_url: str,
        ttl_hours: int = DEFAULT_INVITE_TTL_HOURS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._invites = invites
        self._users = users
        self._roles = roles
        self._mailer = mailer
        self._base_url = base_url.rstrip("/")
        self._ttl = timedelta(hours=int(ttl_hours))
        self._clock = clock

    def invite_link(self, token: str) -> str:
        return f"{self._base_url}/invites/{token}"

    def send_invite(
        self,
        *,
        user_id: str,
        email: str,
        name: str,
        role: Role,
        institute_id: Optional[int],
    ) -> str:
        """Create a token, email the link, then flag the user as registered.

        Raises `InviteDeliveryError` if the email could not be sent; the user is
        left unregistered in that case.
        """
        now = self._clock()
        # Only the newest link may be accepted.
        self._invites.revoke_pending(user_id, revoked_at=now)
        token = secrets.token_urlsafe(INVITE_TOKEN_BYTES)
        self._invites.create(
            token=token,
            user_id=user_id,
            role_id=self._roles.id_for(role),
            institute_id=institute_id,
            expires_at=now + self._ttl,
        )

        hours = int(self._ttl.total_seconds() // 3600)
        body = (
            f"Hello {name},\n\n"
            f"You have been added as a {role.label} on the internship portal.\n"
            f"Set your password to activate your account:\n\n"
            f"{self.invite_link(token)}\n\n"
            f"This link expires in {hours} hours.\n"
        )
        self._mailer.send(to=email, subject="You're invited to the internship portal", body=body)

        self._users.mark_invited(user_id, auth_id=new_id())
        logger.info("invite sent user_id=%s role=%s", user_id, role.value)
        return token

    def resend(self, *, user_id: str, role: Role, institute_id: Optional[int]) -> str:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User does not exist")
        if user.is_verified:
            raise ValidationError("User has already accepted the invitation")
        return self.send_invite(
            user_id=user.id,
            email=user.email,
            name=user.name,
            role=role,
            institute_id=institute_id,
        )

    def get_pending(self, token: str) -> tuple[Invite, User]:
        invite = self._invites.get(token)
        if not invite or not invite.is_usable(self._clock()):
            raise AuthenticationError("This invitation link is invalid or has expired")
        user = self._users.get_by_id(invite.user_id)
        if not user or user.is_verified:
            raise AuthenticationError("This invitation link is invalid or has expired")
        return invite, user

    def accept(self, token: str, *, password: str, confirm: str) -> User:
        _, user = self.get_pending(token)

        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if password != confirm:
            raise ValidationError("Passwords do not match")

        if not self._invites.mark_used(token, used_at=self._clock()):
            raise AuthenticationError("This invitation link is invalid or has expired")

        self._users.set_password(user.id, password_hash=generate_password_hash(password))
        if not user.auth_id:
            self._users.mark_invited(user.id, auth_id=new_id())

        logger.info("invite accepted user_id=%s", user.id)
        return user
