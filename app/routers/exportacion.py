"""
Exportación router.

Mounts under ``/api/exportar`` (prefix set in ``main.py``).

Requires a valid JWT.  The workbook is built in memory and streamed with
``StreamingResponse``; the ``Content-Disposition`` header makes browsers
download it instead of displaying it.

Endpoints
---------
GET /proveedores.xlsx  — Suppliers with their retention configuration.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.services import exportacion_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Exportación"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get(
    "/proveedores.xlsx",
    summary="Exportar proveedores a Excel (.xlsx)",
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Archivo Excel generado exitosamente.",
            "content": {_XLSX_MEDIA_TYPE: {}},
        },
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def export_proveedores(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    activo: Annotated[bool | None, Query(description="Filtrar por estado.")] = None,
) -> StreamingResponse:
    logger.info("GET /exportar/proveedores.xlsx activo=%s", activo)
    file_bytes = exportacion_service.export_proveedores(db, activo=activo)

    filename = f"proveedores_{date.today().isoformat()}.xlsx"
    return StreamingResponse(
        io.BytesIO(file_bytes),
        media_type=_XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Length": str(len(file_bytes)),
        },
    )
