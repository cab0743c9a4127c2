"""
Authentication service for operator login, logout, password changes and admin bootstrap.
Sessions are server-side; the browser only holds a signed session id cookie.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple, Dict, Any
from fastapi import Response
from realty.config import Settings
from realty.database import utcnow
from realty.schemas.auth import UserRecord, UserResponse
from realty.sessions.base import SessionStore
from realty.storage.base import Storage
from realty.utils.auth import (
    hash_password,
    new_session_id,
    sign_session_id,
    unsign_session_id,
    verify_password,
)
from realty.utils.exceptions import InvalidCredentialsError, NotFoundError
import logging

logger = logging.getLogger(__name__)


def sanitize_user(user: UserRecord) -> UserResponse:
    """Drop the password hash before a user leaves the service layer."""
    return UserResponse(id=user.id, email=user.email, name=user.name)


def set_session_cookie(response: Response, settings: Settings, sid: str, expires_at: datetime) -> None:
    """Attach the signed session id cookie to a response."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_id(sid, settings.session_secret, expires_at),
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


class AuthService:
    """
    Authentication service for managing operator sessions.

    Args:
        storage: Entity storage holding user accounts
        session_store: Store holding login sessions
        settings: Application settings (session secret, TTL, admin bootstrap)
    """

    def __init__(self, storage: Storage, session_store: SessionStore, settings: Settings):
        self.storage = storage
        self.session_store = session_store
        self.settings = settings

    def session_expiry(self) -> datetime:
        return utcnow() + timedelta(seconds=self.settings.session_ttl_seconds)

    async def authenticate_user(self, email: str, password: str) -> UserRecord:
        """
        Check credentials against stored users.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password does not match
        """
        user = await self.storage.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    async def login(self, email: str, password: str) -> Tuple[UserResponse, str, datetime]:
        """
        Authenticate the operator and open a session.

        Returns:
            Tuple of (sanitised user, session id, session expiry)
        """
        user = await self.authenticate_user(email, password)
        public_user = sanitize_user(user)

        sid = new_session_id()
        expires_at = self.session_expiry()
        await self.session_store.set(sid, {"user": public_user.model_dump()}, expires_at)
        return public_user, sid, expires_at

    async def logout(self, sid: Optional[str]) -> None:
        if sid:
            await self.session_store.destroy(sid)
            logger.info("Session destroyed")

    async def resolve_session(self, cookie_value: Optional[str]) -> Optional[Tuple[str, Dict[str, Any]]]:
        """
        Turn a cookie value into (sid, payload) for a live session.
        Returns None for missing, forged or expired sessions.
        """
        if not cookie_value:
            return None
        sid = unsign_session_id(cookie_value, self.settings.session_secret)
        if not sid:
            return None
        payload = await self.session_store.get(sid)
        if not payload or "user" not in payload:
            return None
        return sid, payload

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        """
        Replace the operator's password after re-checking the current one.

        Raises:
            NotFoundError: If the account no longer exists
            InvalidCredentialsError: If current_password is wrong; the hash is left unchanged
        """
        user = await self.storage.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        if not verify_password(current_password, user.password_hash):
            logger.warning(f"Password change rejected for {user.email}: wrong current password")
            raise InvalidCredentialsError("Current password is incorrect")

        await self.storage.update_user_password(user_id, hash_password(new_password))
        logger.info(f"Password changed for {user.email}")

    async def bootstrap_admin(self) -> Optional[UserRecord]:
        """
        Create the configured admin account if it does not exist yet.

        Returns:
            The created user, or None when nothing was done
        """
        email = self.settings.admin_email
        password = self.settings.admin_password
        if not email or not password:
            logger.info("Admin bootstrap skipped: ADMIN_EMAIL/ADMIN_PASSWORD not set")
            return None

        if await self.storage.get_user_by_email(email) is not None:
            logger.debug(f"Admin account {email} already exists")
            return None

        user = await self.storage.create_user(email, hash_password(password), self.settings.admin_name)
        logger.info(f"Admin account created: {user.email}")
        return user
