from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CollegeMentor


class MentorRepository(Protocol):
    def create(self, *, uid: str, department_id: str, institute_id: int) -> None:
        raise NotImplementedError

    def get(self, uid: str) -> Optional[CollegeMentor]:
        raise NotImplementedError

    def list_for_scope(self, *, institute_id: int, department_id: Optional[str] = None) -> Sequence[dict]:
        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError

    def count(self, *, institute_id: int, department_id: Optional[str] = None) -> int:
        raise NotImplementedError
