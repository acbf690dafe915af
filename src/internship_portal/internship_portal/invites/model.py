from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Invite:
    token: str
    user_id: str
    role_id: str
    institute_id: Optional[int]
    expires_at: datetime
    used_at: Optional[datetime] = None

    def is_usable(self, now: datetime) -> bool:
        return self.used_at is None and now < self.expires_at
