from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_MINUTES
from ..core.exceptions import InvalidTokenError
from .model import User


@dataclass(frozen=True)
class TokenCodec:
    """Signs and verifies the bearer tokens handed out at login."""

    secret_key: str
    algorithm: str = "HS256"
    expire_minutes: int = DEFAULT_TOKEN_MINUTES

    def issue(self, user: User, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode_user_id(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return int(payload["sub"])
        except (JWTError, KeyError, TypeError, ValueError):
            raise InvalidTokenError("Invalid or expired token")
