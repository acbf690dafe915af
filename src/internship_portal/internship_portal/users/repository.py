from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users and their role assignments.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, contact: Optional[int] = None) -> str:
        """Insert a user and return its id.

        Raises `DuplicateKeyError` when the email is already taken.
        """

        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError

    def mark_invited(self, user_id: str, *, auth_id: str) -> bool:
        raise NotImplementedError

    def set_password(self, user_id: str, *, password_hash: str) -> bool:
        raise NotImplementedError

    def list_roles(self, user_id: str) -> Sequence[Role]:
        raise NotImplementedError

    def has_role(self, user_id: str, role_id: str) -> bool:
        raise NotImplementedError

    def add_role(self, user_id: str, role_id: str) -> None:
        raise NotImplementedError

    def remove_role(self, user_id: str, role_id: str) -> bool:
        raise NotImplementedError

    def count_roles(self, user_id: str) -> int:
        raise NotImplementedError


class RoleRepository(Protocol):
    def id_for(self, role: Role) -> str:
        raise NotImplementedError
