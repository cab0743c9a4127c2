"""
FastAPI dependency injection utilities.
Backends and settings live on app.state; the session guard protects admin routes.
"""

from fastapi import Depends, Request, Response
from realty.config import Settings
from realty.schemas.auth import UserResponse
from realty.services.auth import AuthService, set_session_cookie
from realty.sessions.base import SessionStore
from realty.storage.base import Storage
from realty.utils.exceptions import UnauthorizedError


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


async def get_auth_service(
    storage: Storage = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings)
) -> AuthService:
    """
    Get authentication service instance.

    Returns:
        AuthService bound to the app's storage and session store
    """
    return AuthService(storage, session_store, settings)


async def require_session_user(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    """
    Get the operator of the current session.

    Only the session store is consulted, so unauthenticated requests are
    rejected before any entity storage call.

    Raises:
        UnauthorizedError: If the cookie is missing, forged or the session expired
    """
    settings = auth_service.settings
    resolved = await auth_service.resolve_session(request.cookies.get(settings.session_cookie_name))
    if resolved is None:
        raise UnauthorizedError()

    sid, payload = resolved
    request.state.session_id = sid

    if settings.session_rolling:
        expires_at = auth_service.session_expiry()
        await auth_service.session_store.touch(sid, expires_at)
        set_session_cookie(response, settings, sid, expires_at)

    return UserResponse(**payload["user"])
