from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent / "seed.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(conn_factory: DatabaseConnection, path: Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)
    _exec_sql_file(conn_factory, Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    _exec_sql_file(DatabaseConnection(DBConfig.from_dict(db_config)), Path(seed_path))


def ensure_demo_institute(db_config: dict) -> None:
    """Create (or refresh) a demo institute and its coordinator account."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT id FROM roles WHERE name=%s", ("institute-coordinator",))
        role = cur.fetchone()
        if not role:
            raise RuntimeError("Missing roles row for institute-coordinator; apply seed.sql first")

        email = "coordinator@demo-institute.edu"
        password_hash = generate_password_hash("coordinator123")
        cur.execute("SELECT id FROM users WHERE email=%s", (email,))
        existing = cur.fetchone()
        if existing:
            user_id = existing["id"]
            cur.execute(
                "UPDATE users SET password_hash=%s, is_registered=1, is_verified=1 WHERE id=%s",
                (password_hash, user_id),
            )
        else:
            user_id = str(uuid.uuid4())
            cur.execute(
                """
                INSERT INTO users (id, auth_id, name, email, password_hash, is_registered, is_verified)
                VALUES (%s, %s, %s, %s, %s, 1, 1)
                """,
                (user_id, str(uuid.uuid4()), "Demo Coordinator", email, password_hash),
            )

        cur.execute("INSERT IGNORE INTO user_roles (uid, role_id) VALUES (%s, %s)", (user_id, role["id"]))
        cur.execute(
            """
            INSERT IGNORE INTO institutes (institute_id, uid, name, institute_email_domain, student_email_domain)
            VALUES (%s, %s, %s, %s, %s)
            """,
            (1, user_id, "Demo Institute of Technology", "demo-institute.edu", "students.demo-institute.edu"),
        )
        conn.commit()
        logger.info("demo institute ready (login: %s)", email)
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
