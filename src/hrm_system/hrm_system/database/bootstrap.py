from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "123456"

# (email, name, role, employee_code, department, position, join_date, salary)
DEMO_ACCOUNTS = (
    ("admin@company.com", "Admin User", "admin", "EMP001", "Administration", "System Administrator", "2023-01-01", 50000),
    ("hr@company.com", "HR Manager", "hr", "EMP002", "Human Resources", "HR Manager", "2023-01-15", 45000),
    ("manager@company.com", "Development Manager", "manager", "EMP003", "Development", "Development Manager", "2023-02-01", 55000),
    ("employee@company.com", "John Doe", "employee", "EMP004", "Development", "Software Developer", "2023-03-01", 40000),
)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "hrm_db")),
    )


def _connect(db_config: dict, *, with_database: bool = True):
    target = _as_target(db_config)
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


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


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)
    logger.info("Schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)
    logger.info("Seed data applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the four demo accounts with linked employee profiles.

    The developer reports to the development manager, and the manager is
    handed one starter task for them.
    """

    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True, buffered=True)
        password_hash = generate_password_hash(DEMO_PASSWORD)
        employee_ids: dict[str, int] = {}

        for email, name, role, code, department, position, join_date, salary in DEMO_ACCOUNTS:
            cur.execute("SELECT id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = int(existing["id"])
                cur.execute(
                    "UPDATE users SET name=%s, password_hash=%s, role=%s, is_active=1 WHERE id=%s",
                    (name, password_hash, role, user_id),
                )
            else:
                cur.execute(
                    "INSERT INTO users (email, password_hash, name, role) VALUES (%s, %s, %s, %s)",
                    (email, password_hash, name, role),
                )
                user_id = int(cur.lastrowid)

            cur.execute("SELECT id FROM employees WHERE employee_code=%s", (code,))
            row = cur.fetchone()
            if row:
                employee_id = int(row["id"])
                cur.execute(
                    """
                    UPDATE employees
                    SET user_id=%s, name=%s, email=%s, department=%s, position=%s
                    WHERE id=%s
                    """,
                    (user_id, name, email, department, position, employee_id),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO employees (employee_code, user_id, name, email, department, position,
                                           join_date, salary, status, skills)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 'active', '[]')
                    """,
                    (code, user_id, name, email, department, position, join_date, salary),
                )
                employee_id = int(cur.lastrowid)
            employee_ids[role] = employee_id

        cur.execute(
            "UPDATE employees SET manager_id=%s WHERE id=%s",
            (employee_ids["manager"], employee_ids["employee"]),
        )

        cur.execute("SELECT id FROM tasks WHERE title=%s", ("Setup Development Environment",))
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO tasks (title, description, assigned_to, assigned_by, department, priority, status, progress)
                VALUES (%s, %s, %s, %s, %s, 'high', 'in_progress', 20)
                """,
                (
                    "Setup Development Environment",
                    "Configure development tools and environment",
                    employee_ids["employee"],
                    employee_ids["manager"],
                    "Development",
                ),
            )

        conn.commit()
        logger.info("Demo accounts ready: %s", ", ".join(a[0] for a in DEMO_ACCOUNTS))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
