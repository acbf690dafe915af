from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Note
from .repository import NoteRepository


def _to_note(row: dict) -> Note:
    return Note(id=int(row["id"]), uid=row["uid"], title=row["title"], description=row["description"])


class MySQLNoteRepository(NoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, uid: str, title: str, description: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO notes(uid, title, description) VALUES(%s,%s,%s)", (uid, title, description))
            return int(cur.lastrowid)

    def get(self, note_id: int) -> Optional[Note]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, uid, title, description FROM notes WHERE id=%s", (int(note_id),))
            row = fetchone(cur)
            return _to_note(row) if row else None

    def list_for_user(self, uid: str) -> Sequence[Note]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, uid, title, description FROM notes WHERE uid=%s ORDER BY id DESC", (uid,))
            return [_to_note(r) for r in fetchall(cur)]

    def delete(self, note_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM notes WHERE id=%s", (int(note_id),))
            return cur.rowcount > 0
