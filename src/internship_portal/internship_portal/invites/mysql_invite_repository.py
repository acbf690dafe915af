from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Invite
from .repository import InviteRepository


class MySQLInviteRepository(InviteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        token: str,
        user_id: str,
        role_id: str,
        institute_id: Optional[int],
        expires_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invites(token, user_id, role_id, institute_id, expires_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (token, user_id, role_id, institute_id, expires_at),
            )

    def get(self, token: str) -> Optional[Invite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT token, user_id, role_id, institute_id, expires_at, used_at FROM invites WHERE token=%s",
                (token,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Invite(
                token=row["token"],
                user_id=row["user_id"],
                role_id=row["role_id"],
                institute_id=row.get("institute_id"),
                expires_at=row["expires_at"],
                used_at=row.get("used_at"),
            )

    def mark_used(self, token: str, *, used_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE invites SET used_at=%s WHERE token=%s AND used_at IS NULL",
                (used_at, token),
            )
            return cur.rowcount > 0

    def revoke_pending(self, user_id: str, *, revoked_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE invites SET used_at=%s WHERE user_id=%s AND used_at IS NULL",
                (revoked_at, user_id),
            )
            return cur.rowcount
