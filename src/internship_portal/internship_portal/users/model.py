from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a person, independent of the roles they hold.

    Note: Plain data object (no DB access code).
    """

    id: str
    name: str
    email: str
    auth_id: Optional[str] = None
    contact: Optional[int] = None
    password_hash: Optional[str] = None
    is_registered: bool = False
    is_verified: bool = False
    created_at: Optional[datetime] = None
