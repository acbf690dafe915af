from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, uid: str, name: str, institute_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO departments(uid, name, institute_id) VALUES(%s,%s,%s)",
                (uid, name, int(institute_id)),
            )

    def get(self, uid: str) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT uid, name, institute_id FROM departments WHERE uid=%s", (uid,))
            row = fetchone(cur)
            if not row:
                return None
            return Department(uid=row["uid"], name=row["name"], institute_id=int(row["institute_id"]))

    def list_for_institute(self, institute_id: int) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT d.uid, d.name, u.name AS coordinator_name, u.email, u.is_verified,
                       (SELECT COUNT(*) FROM college_mentors m WHERE m.department_id = d.uid) AS mentor_count,
                       (SELECT COUNT(*) FROM students s WHERE s.department_id = d.uid) AS student_count
                FROM departments d
                JOIN users u ON u.id = d.uid
                WHERE d.institute_id=%s
                ORDER BY d.name
                """,
                (int(institute_id),),
            )
            return [
                {
                    "uid": r["uid"],
                    "name": r["name"],
                    "coordinator_name": r["coordinator_name"],
                    "email": r["email"],
                    "is_verified": bool(r["is_verified"]),
                    "mentor_count": int(r["mentor_count"] or 0),
                    "student_count": int(r["student_count"] or 0),
                }
                for r in fetchall(cur)
            ]

    def delete(self, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE uid=%s", (uid,))
            return cur.rowcount > 0

    def count_for_institute(self, institute_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(uid) AS c FROM departments WHERE institute_id=%s", (int(institute_id),))
            return fetch_count(cur)
