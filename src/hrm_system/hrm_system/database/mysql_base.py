from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection,
    *,
    dictionary: bool = True,
    duplicate_message: Optional[str] = None,
) -> Iterator[tuple[Any, Any]]:
    """Yield (connection, cursor); commit on success, rollback on error.

    With `duplicate_message`, a duplicate-key error surfaces as ConflictError.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except IntegrityError as e:
        conn.rollback()
        if duplicate_message and e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(duplicate_message) from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(float(parts[2])) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return float(value)


def load_json_list(value: Any) -> list:
    """JSON columns come back as str or bytes depending on the connector build."""
    if value is None or value == "":
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return list(value or [])


def dump_json_list(value: Optional[list]) -> str:
    return json.dumps(list(value or []), ensure_ascii=False)


def scope_clause(scope, *, employee_col: str, department_col: str, manager_col: str) -> tuple[str, list]:
    """SQL fragment restricting rows to a caller scope.

    Scope semantics are documented on `access.scope.Scope`.
    """

    if scope.employee_id is not None:
        return f"{employee_col}=%s", [int(scope.employee_id)]
    if scope.manager_id is not None:
        return (
            f"({department_col}=%s OR {manager_col}=%s OR {employee_col}=%s)",
            [scope.department, int(scope.manager_id), int(scope.manager_id)],
        )
    return "1=1", []
