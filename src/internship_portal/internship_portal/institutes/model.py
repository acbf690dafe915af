from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Institute:
    institute_id: int
    uid: str
    name: str
    address: Optional[str] = None
    institute_email_domain: Optional[str] = None
    student_email_domain: Optional[str] = None
