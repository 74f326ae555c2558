"""
Retenciones router.

Mounts under ``/api/retenciones`` (prefix set in ``main.py``).

Endpoints
---------
POST /calcular           — Run the withholding calculator for a payment.
GET  /nit/{numero}/dv    — DIAN check digit and display form of a NIT.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.retencion import (
    CalculoRetencionRequest,
    CalculoRetencionResponse,
    NitResponse,
)
from app.services import retencion_service
from app.services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Retenciones"])


@router.post(
    "/calcular",
    response_model=CalculoRetencionResponse,
    summary="Calcular retenciones",
    description=(
        "Evalúa los conceptos asignados al proveedor para el tipo de transacción. "
        "Si la empresa no es agente retenedor el resultado es vacío. Cada concepto "
        "aplica cuando la base alcanza su base mínima; el valor se redondea a pesos."
    ),
    responses={
        404: {"description": "Proveedor o empresa no encontrados."},
        422: {"description": "Base negativa, tipo de transacción inválido o sin empresa."},
    },
)
def calcular(
    data: CalculoRetencionRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Usuario, Depends(get_current_user)],
) -> CalculoRetencionResponse:
    return retencion_service.calcular_retenciones(db, data, current_user)


@router.get(
    "/nit/{numero}/dv",
    response_model=NitResponse,
    summary="Dígito de verificación de un NIT",
    responses={422: {"description": "El número no contiene dígitos."}},
)
def digito_verificacion(
    numero: Annotated[str, Path(max_length=25, description="NIT con o sin puntos.")],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> NitResponse:
    return retencion_service.calcular_digito_verificacion(numero)
