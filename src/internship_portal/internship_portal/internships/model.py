from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import InternshipMode


@dataclass(frozen=True)
class Internship:
    id: str
    student_id: str
    college_mentor_id: str
    company_name: str
    company_address: str
    role: str
    field: str
    mode: InternshipMode
    start_date: date
    end_date: date
    internship_letter_url: str
    approved: bool = False
    company_mentor_email: Optional[str] = None
    total_holidays: Optional[int] = None
    created_at: Optional[datetime] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
