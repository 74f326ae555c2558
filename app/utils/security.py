"""
Security utilities for the ERP authentication layer.

JWT creation/verification with python-jose and password hashing with bcrypt.
Secrets and lifetimes come from the settings singleton.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Password helpers (bcrypt used directly, without passlib)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check *plain* against a stored hash; a malformed hash never matches."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------


def create_access_token(data: dict[str, Any], expires_minutes: int | None = None) -> str:
    """Create a signed JWT access token.

    The payload is a copy of *data* plus ``iat`` and ``exp`` claims.  The
    caller sets ``sub`` (the user's primary key as a string).

    Args:
        data: Claims to embed.  Must not contain ``exp``.
        expires_minutes: Lifetime override; defaults to
            ``JWT_EXPIRATION_MINUTES``.

    Example::

        token = create_access_token({"sub": str(user.id), "rol": user.rol})
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.JWT_EXPIRATION_MINUTES

    payload = data.copy()
    payload["iat"] = now
    payload["exp"] = now + timedelta(minutes=minutes)
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT access token.

    Raises:
        ValueError: Bad signature, expired or malformed token.  FastAPI
                    dependencies map this to HTTP 401.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("JWT verification failed: %s", exc)
        raise ValueError("Token inválido o expirado") from exc
