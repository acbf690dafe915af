from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def create(self, *, uid: str, name: str, institute_id: int) -> None:
        raise NotImplementedError

    def get(self, uid: str) -> Optional[Department]:
        raise NotImplementedError

    def list_for_institute(self, institute_id: int) -> Sequence[dict]:
        """Return UI rows (joined with the coordinator's user row)."""

        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError

    def count_for_institute(self, institute_id: int) -> int:
        raise NotImplementedError
