from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Note


class NoteRepository(Protocol):
    def create(self, *, uid: str, title: str, description: str) -> int:
        raise NotImplementedError

    def get(self, note_id: int) -> Optional[Note]:
        raise NotImplementedError

    def list_for_user(self, uid: str) -> Sequence[Note]:
        raise NotImplementedError

    def delete(self, note_id: int) -> bool:
        raise NotImplementedError
