from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.service import SessionUser
from .model import Note
from .repository import NoteRepository


class NoteService:
    """Personal notes; every role has them."""

    def __init__(self, notes: NoteRepository):
        self._notes = notes

    def add(self, actor: SessionUser, *, title: str, description: str) -> int:
        return self._notes.create(
            uid=actor.user_id,
            title=require_non_empty(title, "Title"),
            description=require_non_empty(description, "Description"),
        )

    def list_mine(self, actor: SessionUser) -> Sequence[Note]:
        return self._notes.list_for_user(actor.user_id)

    def delete(self, actor: SessionUser, *, note_id: int) -> None:
        note = self._notes.get(note_id)
        if not note:
            raise ValidationError("Note does not exist")
        if note.uid != actor.user_id:
            raise AuthorizationError("You can only delete your own notes")
        self._notes.delete(note.id)
