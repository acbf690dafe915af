from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import InternshipMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, new_id, normalize_mysql_date
from .model import Internship
from .repository import InternshipRepository

_COLUMNS = """
    id, student_id, college_mentor_id, company_name, company_address, role, field, mode,
    start_date, end_date, internship_letter_url, approved, company_mentor_email, total_holidays, created_at
"""


def _to_internship(row: dict) -> Internship:
    return Internship(
        id=row["id"],
        student_id=row["student_id"],
        college_mentor_id=row["college_mentor_id"],
        company_name=row["company_name"],
        company_address=row["company_address"],
        role=row["role"],
        field=row["field"],
        mode=InternshipMode(row["mode"]),
        start_date=normalize_mysql_date(row["start_date"]),
        end_date=normalize_mysql_date(row["end_date"]),
        internship_letter_url=row["internship_letter_url"],
        approved=bool(row.get("approved")),
        company_mentor_email=row.get("company_mentor_email"),
        total_holidays=row.get("total_holidays"),
        created_at=row.get("created_at"),
    )


class MySQLInternshipRepository(InternshipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        student_id: str,
        college_mentor_id: str,
        company_name: str,
        company_address: str,
        role: str,
        field: str,
        mode: InternshipMode,
        start_date: date,
        end_date: date,
        internship_letter_url: str,
        company_mentor_email: Optional[str] = None,
        total_holidays: Optional[int] = None,
    ) -> str:
        internship_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO internships(
                    id, student_id, college_mentor_id, company_name, company_address, role, field, mode,
                    start_date, end_date, internship_letter_url, company_mentor_email, total_holidays
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    internship_id,
                    student_id,
                    college_mentor_id,
                    company_name,
                    company_address,
                    role,
                    field,
                    mode.value,
                    start_date,
                    end_date,
                    internship_letter_url,
                    company_mentor_email,
                    total_holidays,
                ),
            )
        return internship_id

    def get(self, internship_id: str) -> Optional[Internship]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM internships WHERE id=%s", (internship_id,))
            row = fetchone(cur)
            return _to_internship(row) if row else None

    def list_for_student(self, student_id: str) -> Sequence[Internship]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM internships WHERE student_id=%s ORDER BY start_date DESC",
                (student_id,),
            )
            return [_to_internship(r) for r in fetchall(cur)]

    def list_for_mentor(self, college_mentor_id: str) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT i.id, i.company_name, i.role, i.field, i.mode, i.start_date, i.end_date,
                       i.internship_letter_url, i.approved, u.name AS student_name, u.email AS student_email
                FROM internships i
                JOIN users u ON u.id = i.student_id
                WHERE i.college_mentor_id=%s
                ORDER BY i.approved, i.start_date DESC
                """,
                (college_mentor_id,),
            )
            return [
                {
                    "id": r["id"],
                    "student_name": r["student_name"],
                    "student_email": r["student_email"],
                    "company_name": r["company_name"],
                    "role": r["role"],
                    "field": r["field"],
                    "mode": r["mode"],
                    "start_date": normalize_mysql_date(r["start_date"]),
                    "end_date": normalize_mysql_date(r["end_date"]),
                    "internship_letter_url": r["internship_letter_url"],
                    "approved": bool(r["approved"]),
                }
                for r in fetchall(cur)
            ]

    def approve(self, internship_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE internships SET approved=1 WHERE id=%s AND approved=0", (internship_id,))
            return cur.rowcount > 0

    def count_for_mentor(self, college_mentor_id: str, *, approved: Optional[bool] = None) -> int:
        sql = "SELECT COUNT(id) AS c FROM internships WHERE college_mentor_id=%s"
        params: tuple = (college_mentor_id,)
        if approved is not None:
            sql += " AND approved=%s"
            params += (1 if approved else 0,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetch_count(cur)

    def count_for_student(self, student_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(id) AS c FROM internships WHERE student_id=%s", (student_id,))
            return fetch_count(cur)
