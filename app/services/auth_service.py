"""
Authentication and access control for the supplier ERP.

Every user may be bound to a paying company (``Usuario.empresa_id``).  That
company is the default payer in the withholding calculator, so a user whose
company has been deactivated can neither log in nor keep using a token
issued before the deactivation.  Users without a company (administrators)
are not affected.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.empresa import Empresa
from app.models.usuario import Usuario
from app.utils.security import create_access_token, verify_password, verify_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_empresa_usuario(user: Usuario) -> Empresa | None:
    """Return the user's paying company, or ``None`` when unassigned."""
    if user.empresa_id is None:
        return None
    return user.empresa


def empresa_usuario_inactiva(user: Usuario) -> bool:
    """True when the user points to a company that is missing or inactive."""
    if user.empresa_id is None:
        return False
    empresa = get_empresa_usuario(user)
    return empresa is None or not empresa.activo


def authenticate_user(db: Session, username: str, password: str) -> Usuario | None:
    """Check *username*/*password* and return the active user, or ``None``.

    Unknown users, inactive accounts, wrong passwords and users bound to an
    inactive company all yield ``None``; the router answers 401 for each.
    """
    user: Usuario | None = (
        db.query(Usuario)
        .filter(Usuario.username == username, Usuario.activo.is_(True))
        .first()
    )
    if user is None or not verify_password(password, user.password_hash):
        logger.debug("authenticate_user: rejected credentials for '%s'", username)
        return None

    if empresa_usuario_inactiva(user):
        logger.warning(
            "Login rechazado para '%s': empresa %s inactiva", username, user.empresa_id
        )
        return None

    try:
        user.ultimo_acceso = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError:  # pragma: no cover
        db.rollback()
        logger.warning("Could not update ultimo_acceso for user '%s'", username)

    return user


def create_user_token(user: Usuario) -> str:
    """Issue a JWT for *user* with role and paying-company claims.

    The company claims let the frontend preselect the payer in the
    calculator; they are only present for an active company.
    """
    claims: dict[str, Any] = {
        "sub": str(user.id),
        "username": user.username,
        "rol": user.rol,
        "empresa_id": None,
    }
    empresa = get_empresa_usuario(user)
    if empresa is not None and empresa.activo:
        claims["empresa_id"] = empresa.id
        claims["empresa_nit"] = empresa.nit
    return create_access_token(data=claims)


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> Usuario:
    """Resolve the caller from the Bearer token.

    Raises:
        HTTPException 401: Bad or expired token, unknown or inactive user.
        HTTPException 403: The user's paying company is inactive.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = verify_token(token)
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise credentials_exception

    user: Usuario | None = (
        db.query(Usuario)
        .filter(Usuario.id == user_id, Usuario.activo.is_(True))
        .first()
    )
    if user is None:
        raise credentials_exception

    if empresa_usuario_inactiva(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"La empresa asociada al usuario (id={user.empresa_id}) está inactiva.",
        )
    return user


def require_role(*roles: str):
    """Dependency factory: allow only users whose ``rol`` is in *roles* (else 403).

    Example::

        @router.post("/", dependencies=[Depends(require_role("ADMIN", "CONTABILIDAD"))])
    """
    allowed = frozenset(roles)

    def _check_role(
        current_user: Annotated[Usuario, Depends(get_current_user)],
    ) -> Usuario:
        if current_user.rol not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    f"Acceso denegado. Se requiere uno de los roles: "
                    f"{sorted(allowed)}"
                ),
            )
        return current_user

    return _check_role
