from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone
from .model import CollegeMentor
from .repository import MentorRepository


def _scope_clause(institute_id: int, department_id: Optional[str], alias: str = "") -> tuple[str, tuple]:
    prefix = f"{alias}." if alias else ""
    where = f"{prefix}institute_id=%s"
    params: tuple = (int(institute_id),)
    if department_id:
        where += f" AND {prefix}department_id=%s"
        params += (department_id,)
    return where, params


class MySQLMentorRepository(MentorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, uid: str, department_id: str, institute_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO college_mentors(uid, department_id, institute_id) VALUES(%s,%s,%s)",
                (uid, department_id, int(institute_id)),
            )

    def get(self, uid: str) -> Optional[CollegeMentor]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid, department_id, institute_id FROM college_mentors WHERE uid=%s", (uid,))
            row = fetchone(cur)
            if not row:
                return None
            return CollegeMentor(
                uid=row["uid"],
                department_id=row["department_id"],
                institute_id=int(row["institute_id"]),
            )

    def list_for_scope(self, *, institute_id: int, department_id: Optional[str] = None) -> Sequence[dict]:
        where, params = _scope_clause(institute_id, department_id, "m")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT m.uid, u.name, u.email, u.contact, u.is_verified,
                       d.name AS department_name,
                       (SELECT COUNT(*) FROM students s WHERE s.college_mentor_id = m.uid) AS student_count
                FROM college_mentors m
                JOIN users u ON u.id = m.uid
                JOIN departments d ON d.uid = m.department_id
                WHERE {where}
                ORDER BY u.name
                """,
                params,
            )
            return [
                {
                    "uid": r["uid"],
                    "name": r["name"],
                    "email": r["email"],
                    "contact": r.get("contact"),
                    "is_verified": bool(r["is_verified"]),
                    "department_name": r["department_name"],
                    "student_count": int(r["student_count"] or 0),
                }
                for r in fetchall(cur)
            ]

    def delete(self, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM college_mentors WHERE uid=%s", (uid,))
            return cur.rowcount > 0

    def count(self, *, institute_id: int, department_id: Optional[str] = None) -> int:
        where, params = _scope_clause(institute_id, department_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(uid) AS c FROM college_mentors WHERE {where}", params)
            return fetch_count(cur)
