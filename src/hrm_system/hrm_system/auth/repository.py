from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Account lookup used by login and token resolution."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

