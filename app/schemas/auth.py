"""
Pydantic v2 schemas for the authentication endpoints.

Covers the JWT token response and the
public user representation returned by ``GET /api/auth/me``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Response body returned after a successful authentication.

    Attributes:
        access_token: Signed JWT string to be sent in the
                      ``Authorization: Bearer <token>`` header.
        token_type: Always ``"bearer"`` per OAuth2 convention.
    """

    access_token: str = Field(..., description="JWT de acceso firmado con HS256")
    token_type: str = Field(default="bearer", description="Tipo de token OAuth2")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
            }
        }
    )


class UserResponse(BaseModel):
    """Public representation of an authenticated user.

    Returned by ``GET /api/auth/me`` and embedded in other responses
    that reference user identity.  Sensitive fields (``password_hash``,
    timestamps) are deliberately excluded.

    Attributes:
        id: Database primary key.
        username: Unique login name.
        email: Email address on record.
        nombre_completo: Full display name.
        rol: Role code; one of ``constants.ROLES``.
        empresa_id: Default paying company of the user, or ``None``.
        activo: Whether the account is currently active.
    """

    id: int
    username: str
    email: str
    nombre_completo: str | None = None
    rol: str
    empresa_id: int | None = None
    activo: bool

    # Enable ORM-mode so FastAPI can serialise SQLAlchemy model instances
    # directly without manual dict conversion.
    model_config = ConfigDict(from_attributes=True)
