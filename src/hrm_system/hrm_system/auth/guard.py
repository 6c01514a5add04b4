from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import request

from .service import AuthService


def token_required(auth_service: AuthService) -> Callable:
    """Resolve the bearer token and pass the caller to the view as `caller=`.

    Authentication errors propagate to the app's error handlers (401/403).
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            caller = auth_service.resolve_caller(request.headers.get("Authorization"))
            return view(*args, caller=caller, **kwargs)

        return wrapper

    return decorator
