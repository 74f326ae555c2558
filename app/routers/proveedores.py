"""
Proveedores router.

Mounts under ``/api/proveedores`` (prefix set in ``main.py``).

Reads require a valid JWT; writes require one of ``ROLES_ESCRITURA``.

Endpoints
---------
GET    /                    — Paginated supplier list with free-text search.
POST   /asignacion-masiva   — Assign or remove concepts on many suppliers.
GET    /{id}                — Supplier detail with assigned concepts.
POST   /                    — Register a supplier (NIT check digit computed).
PUT    /{id}                — Partial update.
DELETE /{id}                — Soft delete.
PUT    /{id}/retenciones    — Replace goods/services concept assignments.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.common import PaginationParams
from app.schemas.proveedor import (
    AsignacionMasivaRequest,
    AsignacionMasivaResponse,
    AsignacionRetencionesRequest,
    ProveedorCreate,
    ProveedorListResponse,
    ProveedorResponse,
    ProveedorUpdate,
)
from app.services import proveedor_service
from app.services.auth_service import get_current_user, require_role
from app.utils.constants import ROLES_ESCRITURA

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Proveedores"])


@router.get(
    "",
    response_model=ProveedorListResponse,
    summary="Listado de proveedores",
    description=(
        "Lista paginada de proveedores ordenada por nombre. ``q`` busca en "
        "nombre, NIT (con o sin puntos), email, teléfono y ciudad."
    ),
)
def list_proveedores(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    q: Annotated[str | None, Query(max_length=100, description="Texto de búsqueda.")] = None,
    activo: Annotated[bool | None, Query(description="Filtrar por estado.")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=200)] = 20,
) -> ProveedorListResponse:
    pagination = PaginationParams(page=page, page_size=page_size)
    return proveedor_service.list_proveedores(db, pagination, q=q, activo=activo)


@router.post(
    "/asignacion-masiva",
    response_model=AsignacionMasivaResponse,
    summary="Asignación masiva de retenciones",
    responses={
        404: {"description": "Algún proveedor no existe."},
        422: {"description": "Conceptos inexistentes o inactivos."},
    },
)
def asignacion_masiva(
    data: AsignacionMasivaRequest,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> AsignacionMasivaResponse:
    return proveedor_service.asignacion_masiva(db, data)


@router.get(
    "/{proveedor_id}",
    response_model=ProveedorResponse,
    summary="Detalle de proveedor",
    responses={404: {"description": "Proveedor no encontrado."}},
)
def get_proveedor(
    proveedor_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ProveedorResponse:
    return proveedor_service.to_response(proveedor_service.get_proveedor(db, proveedor_id))


@router.post(
    "",
    response_model=ProveedorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar proveedor",
    description=(
        "Registra un proveedor. Para documentos NIT el dígito de verificación "
        "se calcula; si se envía y no coincide se rechaza con 422."
    ),
    responses={
        409: {"description": "El número de documento ya está registrado."},
        422: {"description": "DV inválido, ciudad, régimen o conceptos inválidos."},
    },
)
def create_proveedor(
    data: ProveedorCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> ProveedorResponse:
    proveedor = proveedor_service.create_proveedor(db, data)
    logger.info("Proveedor %d registrado por '%s'", proveedor.id, current_user.username)
    return proveedor_service.to_response(proveedor)


@router.put(
    "/{proveedor_id}",
    response_model=ProveedorResponse,
    summary="Actualizar proveedor",
    responses={
        404: {"description": "Proveedor no encontrado."},
        409: {"description": "El número de documento ya está registrado."},
    },
)
def update_proveedor(
    proveedor_id: Annotated[int, Path(ge=1)],
    data: ProveedorUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> ProveedorResponse:
    return proveedor_service.to_response(
        proveedor_service.update_proveedor(db, proveedor_id, data)
    )


@router.delete(
    "/{proveedor_id}",
    response_model=ProveedorResponse,
    summary="Desactivar proveedor",
    description="Borrado lógico: el proveedor queda con ``activo = false``.",
    responses={404: {"description": "Proveedor no encontrado."}},
)
def delete_proveedor(
    proveedor_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> ProveedorResponse:
    return proveedor_service.to_response(proveedor_service.delete_proveedor(db, proveedor_id))


@router.put(
    "/{proveedor_id}/retenciones",
    response_model=ProveedorResponse,
    summary="Asignar conceptos de retención",
    description=(
        "Reemplaza las listas ordenadas de conceptos para bienes y servicios. "
        "Solo se aceptan conceptos activos."
    ),
    responses={
        404: {"description": "Proveedor no encontrado."},
        422: {"description": "Conceptos inexistentes o inactivos."},
    },
)
def asignar_retenciones(
    proveedor_id: Annotated[int, Path(ge=1)],
    data: AsignacionRetencionesRequest,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_ESCRITURA))],
) -> ProveedorResponse:
    return proveedor_service.to_response(
        proveedor_service.asignar_retenciones(db, proveedor_id, data)
    )
