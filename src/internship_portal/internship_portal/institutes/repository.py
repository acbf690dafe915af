from __future__ import annotations

from typing import Optional, Protocol

from .model import Institute


class InstituteRepository(Protocol):
    def get_by_id(self, institute_id: int) -> Optional[Institute]:
        raise NotImplementedError

    def get_by_coordinator(self, uid: str) -> Optional[Institute]:
        raise NotImplementedError
