"""
Authentication API endpoints for operator login, logout, session user and password change.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from realty.services.auth import AuthService, clear_session_cookie, set_session_cookie
from realty.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    UserResponse,
)
from realty.schemas.error import get_error_responses
from realty.utils.auth import unsign_session_id
from realty.utils.dependencies import get_auth_service, require_session_user
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post(
    "/login",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Operator login",
    description="Authenticate with email and password; sets the HttpOnly session cookie",
    responses=get_error_responses(400, 401)
)
async def login(
    login_data: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    """
    Authenticate the operator and open a session.

    Args:
        login_data: Login credentials (email and password)
        response: Response the session cookie is attached to
        auth_service: Authentication service

    Returns:
        The logged-in user without sensitive fields

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, sid, expires_at = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    set_session_cookie(response, auth_service.settings, sid, expires_at)
    return user


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Operator logout"
)
async def logout(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    """Destroy the current session, if any, and clear the cookie."""
    settings = auth_service.settings
    cookie = request.cookies.get(settings.session_cookie_name)
    sid = unsign_session_id(cookie, settings.session_secret) if cookie else None
    await auth_service.logout(sid)
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/user",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    responses=get_error_responses(401)
)
async def get_current_user_info(
    current_user: UserResponse = Depends(require_session_user)
) -> UserResponse:
    return current_user


@router.post(
    "/change-password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Change password",
    description="Replace the operator's password after checking the current one",
    responses=get_error_responses(400, 401)
)
async def change_password(
    password_data: ChangePasswordRequest,
    current_user: UserResponse = Depends(require_session_user),
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    """
    Change the password of the logged-in operator.

    Raises:
        InvalidCredentialsError: If the current password is wrong
    """
    await auth_service.change_password(
        current_user.id,
        password_data.current_password,
        password_data.new_password
    )
    return MessageResponse(message="Password changed successfully")
