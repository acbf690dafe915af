from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Institute
from .repository import InstituteRepository

_SELECT = """
    SELECT institute_id, uid, name, address, institute_email_domain, student_email_domain
    FROM institutes
"""


def _to_institute(row: dict) -> Institute:
    return Institute(
        institute_id=int(row["institute_id"]),
        uid=row["uid"],
        name=row["name"],
        address=row.get("address"),
        institute_email_domain=row.get("institute_email_domain"),
        student_email_domain=row.get("student_email_domain"),
    )


class MySQLInstituteRepository(InstituteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, institute_id: int) -> Optional[Institute]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE institute_id=%s", (int(institute_id),))
            row = fetchone(cur)
            return _to_institute(row) if row else None

    def get_by_coordinator(self, uid: str) -> Optional[Institute]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE uid=%s", (uid,))
            row = fetchone(cur)
            return _to_institute(row) if row else None
