from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Login account.

    Note: Plain data; persistence lives in the repositories.
    """

    id: int
    email: str
    password_hash: str
    name: str
    role: Role
    is_active: bool = True

    def profile(self) -> dict:
        """Public view of the account (never includes the password hash)."""
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role.value}


@dataclass(frozen=True)
class IssuedToken:
    token: str
    user: User
    expires_in: int
    employee_id: Optional[int] = None
