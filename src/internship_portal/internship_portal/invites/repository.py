from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import Invite


class InviteRepository(Protocol):
    def create(
        self,
        *,
        token: str,
        user_id: str,
        role_id: str,
        institute_id: Optional[int],
        expires_at: datetime,
    ) -> None:
        raise NotImplementedError

    def get(self, token: str) -> Optional[Invite]:
        raise NotImplementedError

    def mark_used(self, token: str, *, used_at: datetime) -> bool:
        """Mark an unused invite as used; False if it was already used."""

        raise NotImplementedError

    def revoke_pending(self, user_id: str, *, revoked_at: datetime) -> int:
        """Close every unused invite of the user; returns how many were closed."""

        raise NotImplementedError
