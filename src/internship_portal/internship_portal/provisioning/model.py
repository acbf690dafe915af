from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class NewMember:
    """Who to provision, and under which role."""

    role: Role
    name: str
    email: str
    institute_id: int
    send_invite: bool = True
    contact: Optional[int] = None


@dataclass(frozen=True)
class ProvisionResult:
    user_id: str
    is_new_user: bool
    invited: bool = False
    invite_error: Optional[str] = None
