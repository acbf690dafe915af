from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    uid: str
    department_id: str
    institute_id: int
    academic_year: int
    college_mentor_id: Optional[str] = None
    company_mentor_id: Optional[str] = None
    roll_no: Optional[int] = None
    division: Optional[str] = None
    dob: Optional[date] = None
