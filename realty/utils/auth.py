"""
Authentication utilities for password hashing and session cookie signing.
The cookie carries only a random session id, signed so it cannot be forged.
"""

from datetime import datetime
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
import secrets

SESSION_TOKEN_ALGORITHM = "HS256"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def new_session_id() -> str:
    """Generate an unguessable session id."""
    return secrets.token_urlsafe(32)


def sign_session_id(sid: str, secret: str, expires_at: datetime) -> str:
    """
    Sign a session id into the cookie value.

    Args:
        sid: Session id stored in the session store
        secret: Configured session secret
        expires_at: Session expiry, copied into the token's exp claim

    Returns:
        Encoded token string
    """
    to_encode = {
        "sid": sid,
        "exp": expires_at,
        "type": "session"
    }
    return jwt.encode(to_encode, secret, algorithm=SESSION_TOKEN_ALGORITHM)


def unsign_session_id(token: str, secret: str) -> Optional[str]:
    """
    Recover the session id from a cookie value.

    Returns:
        The session id, or None when the signature, type or expiry is invalid
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[SESSION_TOKEN_ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != "session":
        return None
    return payload.get("sid")


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    if not password:
        raise ValueError("Password cannot be empty")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify password against hash in constant time.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from storage

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)
