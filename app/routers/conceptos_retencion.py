"""
Conceptos de retención router.

Mounts under ``/api/conceptos-retencion`` (prefix set in ``main.py``).

Reads require a valid JWT; writes require one of ``ROLES_CONTABLES``.
DELETE deactivates the concept instead of removing the row.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.retencion import (
    ConceptoRetencionCreate,
    ConceptoRetencionResponse,
    ConceptoRetencionUpdate,
)
from app.services import concepto_service
from app.services.auth_service import get_current_user, require_role
from app.utils.constants import ROLES_CONTABLES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Conceptos de Retención"])


@router.get(
    "",
    response_model=list[ConceptoRetencionResponse],
    summary="Catálogo de conceptos de retención",
)
def list_conceptos(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    activo: Annotated[bool | None, Query(description="Filtrar por estado.")] = None,
    q: Annotated[str | None, Query(max_length=100)] = None,
) -> list[ConceptoRetencionResponse]:
    return [
        ConceptoRetencionResponse.model_validate(c)
        for c in concepto_service.list_conceptos(db, activo=activo, q=q)
    ]


@router.get(
    "/{concepto_id}",
    response_model=ConceptoRetencionResponse,
    summary="Detalle de concepto",
    responses={404: {"description": "Concepto no encontrado."}},
)
def get_concepto(
    concepto_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> ConceptoRetencionResponse:
    return ConceptoRetencionResponse.model_validate(
        concepto_service.get_concepto(db, concepto_id)
    )


@router.post(
    "",
    response_model=ConceptoRetencionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear concepto",
    responses={
        409: {"description": "Código ya registrado."},
        422: {"description": "Datos inválidos o cuenta contable inexistente."},
    },
)
def create_concepto(
    data: ConceptoRetencionCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_CONTABLES))],
) -> ConceptoRetencionResponse:
    return ConceptoRetencionResponse.model_validate(concepto_service.create_concepto(db, data))


@router.put(
    "/{concepto_id}",
    response_model=ConceptoRetencionResponse,
    summary="Actualizar concepto",
    responses={404: {"description": "Concepto no encontrado."}},
)
def update_concepto(
    concepto_id: Annotated[int, Path(ge=1)],
    data: ConceptoRetencionUpdate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_CONTABLES))],
) -> ConceptoRetencionResponse:
    return ConceptoRetencionResponse.model_validate(
        concepto_service.update_concepto(db, concepto_id, data)
    )


@router.delete(
    "/{concepto_id}",
    response_model=ConceptoRetencionResponse,
    summary="Desactivar concepto",
    responses={404: {"description": "Concepto no encontrado."}},
)
def delete_concepto(
    concepto_id: Annotated[int, Path(ge=1)],
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_CONTABLES))],
) -> ConceptoRetencionResponse:
    return ConceptoRetencionResponse.model_validate(
        concepto_service.delete_concepto(db, concepto_id)
    )
