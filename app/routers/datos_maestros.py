"""
Master Data (Datos Maestros) router.

Mounts under ``/api/datos-maestros`` (prefix set in ``main.py``).

These list endpoints serve the dropdowns of the supplier form and the
calculator.  They return only active records and apply no pagination
because the cardinality of each catalog is small.

All endpoints require a valid JWT (``get_current_user``); creating accounts
or companies requires one of ``ROLES_CONTABLES``.

Endpoints
---------
GET  /regimenes-tributarios  — Active tax regimes.
GET  /cuentas-contables      — Chart of accounts, optional ``tipo`` filter.
POST /cuentas-contables      — Add an account.
GET  /empresas               — Paying companies.
POST /empresas               — Register a paying company.
GET  /tipos-documento        — Document types.
GET  /departamentos          — DANE departments.
GET  /ciudades               — DANE cities, optional ``departamento_codigo``.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.usuario import Usuario
from app.schemas.datos_maestros import (
    CiudadResponse,
    CuentaContableCreate,
    CuentaContableResponse,
    DepartamentoResponse,
    EmpresaCreate,
    EmpresaResponse,
    RegimenTributarioResponse,
    TipoDocumentoResponse,
)
from app.services import datos_maestros_service
from app.services.auth_service import get_current_user, require_role
from app.utils.constants import ROLES_CONTABLES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Datos Maestros"])


# ---------------------------------------------------------------------------
# GET /regimenes-tributarios
# ---------------------------------------------------------------------------


@router.get(
    "/regimenes-tributarios",
    response_model=list[RegimenTributarioResponse],
    summary="Listado de regímenes tributarios",
    responses={
        200: {"description": "Lista de regímenes activos."},
        401: {"description": "Token JWT ausente o inválido."},
    },
)
def list_regimenes_tributarios(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[RegimenTributarioResponse]:
    return [
        RegimenTributarioResponse.model_validate(r)
        for r in datos_maestros_service.list_regimenes(db)
    ]


# ---------------------------------------------------------------------------
# /cuentas-contables
# ---------------------------------------------------------------------------


@router.get(
    "/cuentas-contables",
    response_model=list[CuentaContableResponse],
    summary="Plan de cuentas",
)
def list_cuentas_contables(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    tipo: Annotated[
        Literal["ACTIVO", "PASIVO", "PATRIMONIO", "INGRESO", "GASTO", "COSTO"] | None,
        Query(description="Filtrar por tipo de cuenta."),
    ] = None,
) -> list[CuentaContableResponse]:
    return [
        CuentaContableResponse.model_validate(c)
        for c in datos_maestros_service.list_cuentas(db, tipo=tipo)
    ]


@router.post(
    "/cuentas-contables",
    response_model=CuentaContableResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear cuenta contable",
    responses={
        409: {"description": "La cuenta ya existe."},
        422: {"description": "Cuenta padre inválida."},
    },
)
def create_cuenta_contable(
    data: CuentaContableCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_CONTABLES))],
) -> CuentaContableResponse:
    return CuentaContableResponse.model_validate(
        datos_maestros_service.create_cuenta(db, data)
    )


# ---------------------------------------------------------------------------
# /empresas
# ---------------------------------------------------------------------------


@router.get(
    "/empresas",
    response_model=list[EmpresaResponse],
    summary="Empresas pagadoras",
)
def list_empresas(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[EmpresaResponse]:
    return datos_maestros_service.list_empresas(db)


@router.post(
    "/empresas",
    response_model=EmpresaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar empresa",
    responses={
        409: {"description": "NIT ya registrado."},
        422: {"description": "DV o régimen inválidos."},
    },
)
def create_empresa(
    data: EmpresaCreate,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[Usuario, Depends(require_role(*ROLES_CONTABLES))],
) -> EmpresaResponse:
    return datos_maestros_service.create_empresa(db, data)


# ---------------------------------------------------------------------------
# Static catalogs
# ---------------------------------------------------------------------------


@router.get("/tipos-documento", response_model=list[TipoDocumentoResponse])
def list_tipos_documento(
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[TipoDocumentoResponse]:
    return datos_maestros_service.list_tipos_documento()


@router.get("/departamentos", response_model=list[DepartamentoResponse])
def list_departamentos(
    _current_user: Annotated[Usuario, Depends(get_current_user)],
) -> list[DepartamentoResponse]:
    return datos_maestros_service.list_departamentos()


@router.get("/ciudades", response_model=list[CiudadResponse])
def list_ciudades(
    _current_user: Annotated[Usuario, Depends(get_current_user)],
    departamento_codigo: Annotated[
        str | None,
        Query(pattern=r"^[0-9]{2}$", description="Código DANE del departamento."),
    ] = None,
) -> list[CiudadResponse]:
    return datos_maestros_service.list_ciudades(departamento_codigo)
