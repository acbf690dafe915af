from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, normalize_mysql_date
from .model import Student
from .repository import StudentRepository


def _filters(
    institute_id: Optional[int],
    department_id: Optional[str],
    college_mentor_id: Optional[str],
    alias: str = "",
) -> tuple[str, tuple]:
    prefix = f"{alias}." if alias else ""
    clauses: list[str] = []
    params: list = []
    if institute_id is not None:
        clauses.append(f"{prefix}institute_id=%s")
        params.append(int(institute_id))
    if department_id:
        clauses.append(f"{prefix}department_id=%s")
        params.append(department_id)
    if college_mentor_id:
        clauses.append(f"{prefix}college_mentor_id=%s")
        params.append(college_mentor_id)
    return (" AND ".join(clauses) or "1=1"), tuple(params)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        uid: str,
        department_id: str,
        institute_id: int,
        academic_year: int,
        college_mentor_id: Optional[str] = None,
        dob: Optional[date] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(uid, department_id, institute_id, academic_year, college_mentor_id, dob)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (uid, department_id, int(institute_id), int(academic_year), college_mentor_id, dob),
            )

    def get(self, uid: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT uid, department_id, institute_id, academic_year, college_mentor_id,
                       company_mentor_id, roll_no, division, dob
                FROM students
                WHERE uid=%s
                """,
                (uid,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Student(
                uid=row["uid"],
                department_id=row["department_id"],
                institute_id=int(row["institute_id"]),
                academic_year=int(row["academic_year"]),
                college_mentor_id=row.get("college_mentor_id"),
                company_mentor_id=row.get("company_mentor_id"),
                roll_no=row.get("roll_no"),
                division=row.get("division"),
                dob=normalize_mysql_date(row.get("dob")),
            )

    def list_for_scope(
        self,
        *,
        institute_id: int,
        department_id: Optional[str] = None,
        college_mentor_id: Optional[str] = None,
    ) -> Sequence[dict]:
        where, params = _filters(institute_id, department_id, college_mentor_id, "s")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.uid, u.name, u.email, u.contact, u.is_verified,
                       s.academic_year, s.roll_no, s.division,
                       d.name AS department_name,
                       s.college_mentor_id, mu.name AS mentor_name
                FROM students s
                JOIN users u ON u.id = s.uid
                JOIN departments d ON d.uid = s.department_id
                LEFT JOIN users mu ON mu.id = s.college_mentor_id
                WHERE {where}
                ORDER BY s.academic_year, u.name
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
                    "academic_year": int(r["academic_year"]),
                    "roll_no": r.get("roll_no"),
                    "division": r.get("division"),
                    "department_name": r["department_name"],
                    "college_mentor_id": r.get("college_mentor_id"),
                    "mentor_name": r.get("mentor_name") or "-",
                }
                for r in fetchall(cur)
            ]

    def delete(self, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE uid=%s", (uid,))
            return cur.rowcount > 0

    def assign_mentor(self, uid: str, *, college_mentor_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET college_mentor_id=%s WHERE uid=%s", (college_mentor_id, uid))
            return cur.rowcount > 0

    def unassign_mentor(self, college_mentor_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET college_mentor_id=NULL WHERE college_mentor_id=%s", (college_mentor_id,))
            return int(cur.rowcount)

    def count(
        self,
        *,
        institute_id: Optional[int] = None,
        department_id: Optional[str] = None,
        college_mentor_id: Optional[str] = None,
    ) -> int:
        where, params = _filters(institute_id, department_id, college_mentor_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(uid) AS c FROM students WHERE {where}", params)
            return fetch_count(cur)
