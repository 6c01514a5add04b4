from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash

from ..access.scope import CallerContext
from ..common.serialization import to_json
from ..core.exceptions import AuthenticationError
from ..employees.repository import EmployeeRepository
from .model import IssuedToken
from .repository import UserRepository
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login) and resolve bearer tokens."""

    def __init__(self, users: UserRepository, employees: EmployeeRepository, tokens: TokenCodec):
        self._users = users
        self._employees = employees
        self._tokens = tokens

    def authenticate(self, email: str, password: str) -> IssuedToken:
        user = self._users.get_by_email((email or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        employee = self._employees.get_by_user_id(user.id)
        return IssuedToken(
            token=self._tokens.issue(user),
            user=user,
            expires_in=self._tokens.expire_minutes * 60,
            employee_id=employee.id if employee else None,
        )

    def resolve_caller(self, authorization: Optional[str]) -> CallerContext:
        """Turn an `Authorization: Bearer ...` header into the request's caller."""

        scheme, _, token = (authorization or "").partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise AuthenticationError("Missing bearer token")

        user_id = self._tokens.decode_user_id(token)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("User no longer exists")

        return CallerContext(user=user, employee=self._employees.get_by_user_id(user.id))

    def me(self, caller: CallerContext) -> dict:
        profile = caller.user.profile()
        profile["employee"] = to_json(caller.employee) if caller.employee else None
        return profile
