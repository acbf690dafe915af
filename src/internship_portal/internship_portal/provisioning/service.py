from __future__ import annotations

import logging
from typing import Callable

from ..common.validators import require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, DataAccessError, DuplicateKeyError, InviteDeliveryError, ValidationError
from ..invites.service import InviteService
from ..users.repository import RoleRepository, UserRepository
from .model import NewMember, ProvisionResult

logger = logging.getLogger(__name__)


class ProvisioningService:
    """Use case: add a person under a role without ever duplicating them.

    The flow is insert-first: a duplicate email on `users` means the person
    already exists, in which case the role is attached to the existing user.
    A person who already holds the role is rejected with `ConflictError`.
    """

    def __init__(self, users: UserRepository, roles: RoleRepository, invites: InviteService):
        self._users = users
        self._roles = roles
        self._invites = invites

    def provision(self, member: NewMember, attach: Callable[[str], None]) -> ProvisionResult:
        """Create or reuse the user, run `attach(user_id)`, then grant the role.

        `attach` inserts the role-specific row (department, mentor, student).
        """
        name = require_non_empty(member.name, "Name")
        email = require_email(member.email)
        role_id = self._roles.id_for(member.role)
        conflict = ConflictError(f"User is already a {member.role.label}.")

        existing = None
        try:
            user_id = self._users.create_user(name=name, email=email, contact=member.contact)
        except DuplicateKeyError:
            existing = self._users.get_by_email(email)
            if not existing:
                raise ValidationError("A user with this email exists but could not be loaded")
            if self._users.has_role(existing.id, role_id):
                raise conflict
            user_id = existing.id

        try:
            attach(user_id)
            self._users.add_role(user_id, role_id)
        except Exception as e:
            if existing is None:
                # Undo the fresh user row (its entity row cascades) so a retry starts clean.
                self._users.delete_by_id(user_id)
            if isinstance(e, DuplicateKeyError):
                raise conflict from e
            raise

        invited = False
        invite_error = None
        # Registered users already have an account; never invite them twice.
        if member.send_invite and (existing is None or not existing.is_registered):
            try:
                self._invites.send_invite(
                    user_id=user_id,
                    email=email,
                    name=name if existing is None else existing.name,
                    role=member.role,
                    institute_id=member.institute_id,
                )
                invited = True
            except (InviteDeliveryError, DataAccessError) as e:
                invite_error = str(e)
                logger.warning("invite failed user_id=%s: %s", user_id, e)

        logger.info(
            "provisioned user_id=%s role=%s new=%s invited=%s",
            user_id,
            member.role.value,
            existing is None,
            invited,
        )
        return ProvisionResult(
            user_id=user_id,
            is_new_user=existing is None,
            invited=invited,
            invite_error=invite_error,
        )

    def revoke(self, user_id: str, role: Role) -> bool:
        """Remove `role` from the user; delete the user once no role remains.

        Returns True when the user row itself was deleted.
        """
        self._users.remove_role(user_id, self._roles.id_for(role))
        if self._users.count_roles(user_id) > 0:
            return False
        deleted = self._users.delete_by_id(user_id)
        logger.info("revoked role=%s user_id=%s user_deleted=%s", role.value, user_id, deleted)
        return deleted
