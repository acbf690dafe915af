from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, new_id, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, student_id: str, day: date, status: AttendanceStatus) -> str:
        record_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance(id, student_id, date, status) VALUES(%s,%s,%s,%s)",
                (record_id, student_id, day, status.value),
            )
        return record_id

    def list_for_student(self, student_id: str, *, limit: int = 60) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, date, status
                FROM attendance
                WHERE student_id=%s
                ORDER BY date DESC
                LIMIT %s
                """,
                (student_id, int(limit)),
            )
            return [
                AttendanceRecord(
                    id=r["id"],
                    student_id=r["student_id"],
                    date=normalize_mysql_date(r["date"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def count_for_student(self, student_id: str, *, status: Optional[AttendanceStatus] = None) -> int:
        sql = "SELECT COUNT(id) AS c FROM attendance WHERE student_id=%s"
        params: tuple = (student_id,)
        if status is not None:
            sql += " AND status=%s"
            params += (status.value,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return fetch_count(cur)
