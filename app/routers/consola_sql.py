"""
Administrative SQL console router.

Mounts under ``/api/database`` (prefix set in ``main.py``).

ADMIN only, and disabled unless ``SQL_CONSOLE_ENABLED`` is set.  Errors from
the database are answered with ``{"success": false, "error", "code"}`` and
HTTP 400.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.database import SqlExecuteRequest, SqlExecuteResponse
from app.services.auth_service import require_role
from app.services.sql_service import SqlConsoleError, execute_sql

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Base de Datos"])


@router.post(
    "/execute",
    response_model=SqlExecuteResponse,
    summary="Ejecutar SQL",
    responses={
        400: {"description": "Error de la base de datos."},
        403: {"description": "Consola deshabilitada o rol no autorizado."},
    },
)
def execute(
    data: SqlExecuteRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(require_role("ADMIN"))],
):
    logger.info("SQL console used by '%s'", current_user.username)
    try:
        return execute_sql(db, data.sql)
    except SqlConsoleError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())
