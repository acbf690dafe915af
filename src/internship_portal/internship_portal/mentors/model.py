from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CollegeMentor:
    uid: str
    department_id: str
    institute_id: int
