from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, new_id
from .model import User
from .repository import RoleRepository, UserRepository

_USER_COLUMNS = "id, auth_id, name, email, contact, password_hash, is_registered, is_verified, created_at"


def _to_user(row: dict) -> User:
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        auth_id=row.get("auth_id"),
        contact=row.get("contact"),
        password_hash=row.get("password_hash"),
        is_registered=bool(row.get("is_registered")),
        is_verified=bool(row.get("is_verified")),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, name: str, email: str, contact: Optional[int] = None) -> str:
        user_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(id, name, email, contact) VALUES(%s,%s,%s,%s)",
                (user_id, name, email, contact),
            )
        return user_id

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0

    def mark_invited(self, user_id: str, *, auth_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET is_registered=1, auth_id=COALESCE(auth_id, %s) WHERE id=%s",
                (auth_id, user_id),
            )
            return cur.rowcount > 0

    def set_password(self, user_id: str, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET password_hash=%s, is_verified=1 WHERE id=%s",
                (password_hash, user_id),
            )
            return cur.rowcount > 0

    def list_roles(self, user_id: str) -> Sequence[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.name
                FROM user_roles ur
                JOIN roles r ON r.id = ur.role_id
                WHERE ur.uid=%s
                """,
                (user_id,),
            )
            return [Role(r["name"]) for r in fetchall(cur)]

    def has_role(self, user_id: str, role_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS c FROM user_roles WHERE uid=%s AND role_id=%s", (user_id, role_id))
            return fetch_count(cur) > 0

    def add_role(self, user_id: str, role_id: str) -> None:
        # (uid, role_id) is the primary key; re-assigning is a no-op.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO user_roles(uid, role_id) VALUES(%s,%s)", (user_id, role_id))

    def remove_role(self, user_id: str, role_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM user_roles WHERE uid=%s AND role_id=%s", (user_id, role_id))
            return cur.rowcount > 0

    def count_roles(self, user_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS c FROM user_roles WHERE uid=%s", (user_id,))
            return fetch_count(cur)


class MySQLRoleRepository(RoleRepository):
    """Maps role names to ids; the mapping is loaded once and cached."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._ids: Dict[Role, str] = {}

    def _load(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM roles")
            for r in fetchall(cur):
                try:
                    self._ids[Role(r["name"])] = r["id"]
                except ValueError:
                    continue

    def id_for(self, role: Role) -> str:
        if role not in self._ids:
            self._load()
        try:
            return self._ids[role]
        except KeyError:
            raise RuntimeError(f"Role {role.value!r} is missing from the roles table") from None
