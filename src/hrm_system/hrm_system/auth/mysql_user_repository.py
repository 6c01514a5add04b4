from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "id, email, password_hash, name, role, is_active"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_user(row: dict) -> User:
        return User(
            id=int(row["id"]),
            email=row["email"],
            password_hash=row["password_hash"],
            name=row.get("name") or "",
            role=Role(row["role"]),
            is_active=bool(row.get("is_active", True)),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return self._to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return self._to_user(row) if row else None

