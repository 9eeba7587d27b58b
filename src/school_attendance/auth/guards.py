from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..common.http import error_response, internal_error
from ..core.enums import Role
from ..core.exceptions import DomainError
from .service import AuthService


def bearer_token() -> Optional[str]:
    """Token from ``Authorization: Bearer <token>``; None when absent or malformed."""
    parts = request.headers.get("Authorization", "").split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def build_guards(auth_service: AuthService):
    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.current_user = auth_service.authenticate(bearer_token())
            except DomainError as e:
                return error_response(e)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                auth_service.require_role(g.current_user, Role.ADMIN)
            except DomainError as e:
                return error_response(e)
            except Exception as e:
                return internal_error(e)
            return view(*args, **kwargs)

        return token_required(wrapper)

    return token_required, admin_required
