"""Auth API: admin login, session status and logout."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.auth.session_auth import SESSION_USER_KEY, check_credentials, current_login
from app.config import Settings
from app.routers.utils.dependencies import get_app_settings
from app.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionStatus

router = APIRouter(
    prefix="",
    tags=["auth"],
)


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={401: {"description": "Invalid credentials"}},
)
def login(
    data: LoginRequest,
    request: Request,
    settings: Settings = Depends(get_app_settings),
):
    """Start an admin session when the credentials match."""
    if not check_credentials(data.login, data.password, settings):
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": "Invalid username or password"},
        )
    request.session[SESSION_USER_KEY] = data.login
    return LoginResponse(success=True, user=data.login)


@router.get("/session", response_model=SessionStatus)
def session_status(request: Request) -> SessionStatus:
    """Report whether the caller has an admin session."""
    user = current_login(request)
    return SessionStatus(logged_in=bool(user), user=user)


@router.post("/logout", response_model=LogoutResponse)
def logout(request: Request) -> LogoutResponse:
    """Drop the admin session."""
    request.session.clear()
    return LogoutResponse(success=True)
