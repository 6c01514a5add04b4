from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.hrm_system.hrm_system.auth.tokens import TokenCodec
from src.hrm_system.hrm_system.core.exceptions import AuthenticationError, InvalidTokenError


def test_login_returns_token_for_valid_credentials(demo):
    issued = demo.container.auth_service.authenticate("employee@company.com", "123456")
    assert issued.user.email == "employee@company.com"
    assert issued.employee_id == 4
    assert issued.expires_in == 60 * 60
    assert demo.tokens.decode_user_id(issued.token) == 4


def test_login_without_profile_still_works(demo):
    issued = demo.container.auth_service.authenticate("orphan@company.com", "123456")
    assert issued.employee_id is None


@pytest.mark.parametrize(
    "email,password",
    [("employee@company.com", "wrong"), ("nobody@company.com", "123456"), ("", "")],
)
def test_login_rejects_bad_credentials(demo, email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        demo.container.auth_service.authenticate(email, password)


def test_resolve_caller(demo):
    header = demo.auth_header("manager")["Authorization"]
    caller = demo.container.auth_service.resolve_caller(header)
    assert caller.user.id == 3
    assert caller.employee.employee_code == "EMP003"


def test_missing_header_is_unauthenticated(demo):
    with pytest.raises(AuthenticationError) as exc:
        demo.container.auth_service.resolve_caller(None)
    assert exc.value.status_code == 401

    with pytest.raises(AuthenticationError):
        demo.container.auth_service.resolve_caller("Basic abc")


def test_bad_or_foreign_token_is_forbidden(demo):
    with pytest.raises(InvalidTokenError) as exc:
        demo.container.auth_service.resolve_caller("Bearer not-a-jwt")
    assert exc.value.status_code == 403

    foreign = TokenCodec(secret_key="other-secret").issue(demo.users.get_by_id(1))
    with pytest.raises(InvalidTokenError):
        demo.container.auth_service.resolve_caller(f"Bearer {foreign}")


def test_expired_token(demo):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    token = demo.tokens.issue(demo.users.get_by_id(4), now=issued_at)
    with pytest.raises(InvalidTokenError):
        demo.tokens.decode_user_id(token)


def test_me_includes_employee(demo):
    profile = demo.container.auth_service.me(demo.caller("employee"))
    assert profile["role"] == "employee"
    assert profile["employee"]["employee_code"] == "EMP004"
    assert "password_hash" not in profile

    assert demo.container.auth_service.me(demo.caller("orphan"))["employee"] is None
