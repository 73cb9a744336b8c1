"""
Single shared-secret admin login.

The logged-in user is stored under SESSION_USER_KEY in the signed session cookie
(Starlette SessionMiddleware). AUTH_DISABLED=true lets every request through.
"""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, Request

from app.config import Settings
from app.exceptions import NotAuthenticatedError
from app.routers.utils.dependencies import get_app_settings

SESSION_USER_KEY = "login"


def check_credentials(login: str, password: str, settings: Settings) -> bool:
    """True when login/password match the configured admin credentials."""
    expected_login, expected_password = settings.admin_credentials
    if not expected_login:
        return False
    login_ok = secrets.compare_digest(
        (login or "").encode("utf-8"), expected_login.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        (password or "").encode("utf-8"), expected_password.encode("utf-8")
    )
    return login_ok and password_ok


def current_login(request: Request) -> Optional[str]:
    return request.session.get(SESSION_USER_KEY) or None


def require_auth(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """FastAPI dependency guarding the history routes."""
    if settings.disable_auth:
        return None
    user = current_login(request)
    if not user:
        raise NotAuthenticatedError()
    return user
