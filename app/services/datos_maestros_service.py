"""
Datos Maestros — service layer.

Reference data that feeds the supplier form and the calculator: tax
regimes, the chart of accounts, paying companies and the static DANE
geography lists.  Accounts and companies can be created; everything else
is read-only.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.cuenta_contable import CuentaContable
from app.models.empresa import Empresa
from app.models.regimen_tributario import RegimenTributario
from app.schemas.datos_maestros import (
    CiudadResponse,
    CuentaContableCreate,
    DepartamentoResponse,
    EmpresaCreate,
    EmpresaResponse,
    TipoDocumentoResponse,
)
from app.services.proveedor_service import normalizar_documento
from app.utils.constants import CIUDADES, DEPARTAMENTOS, DEPARTAMENTOS_POR_CODIGO, TIPOS_DOCUMENTO

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Régimen tributario
# ---------------------------------------------------------------------------


def list_regimenes(db: Session) -> list[RegimenTributario]:
    regimenes = (
        db.query(RegimenTributario)
        .filter(RegimenTributario.activo.is_(True))
        .order_by(RegimenTributario.nombre)
        .all()
    )
    logger.debug("list_regimenes: %d records", len(regimenes))
    return regimenes


# ---------------------------------------------------------------------------
# Cuentas contables
# ---------------------------------------------------------------------------


def list_cuentas(db: Session, tipo: str | None = None) -> list[CuentaContable]:
    q = db.query(CuentaContable).filter(CuentaContable.activo.is_(True))
    if tipo is not None:
        q = q.filter(CuentaContable.tipo == tipo)
    cuentas = q.order_by(CuentaContable.codigo).all()
    logger.debug("list_cuentas: tipo=%s %d records", tipo, len(cuentas))
    return cuentas


def create_cuenta(db: Session, data: CuentaContableCreate) -> CuentaContable:
    """Add an account.  ``nivel`` is derived from the length of the code.

    Raises:
        HTTPException 409: Code already exists.
        HTTPException 422: Parent code unknown or not a prefix of the code.
    """
    if db.query(CuentaContable.id).filter(CuentaContable.codigo == data.codigo).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"La cuenta contable '{data.codigo}' ya existe.",
        )

    if data.padre_codigo is not None:
        padre = db.query(CuentaContable).filter(CuentaContable.codigo == data.padre_codigo).first()
        if padre is None or not data.codigo.startswith(data.padre_codigo):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=(
                    f"Cuenta padre '{data.padre_codigo}' no existe o no es prefijo "
                    f"de '{data.codigo}'."
                ),
            )

    cuenta = CuentaContable(
        codigo=data.codigo,
        nombre=data.nombre.strip(),
        tipo=data.tipo,
        nivel=len(data.codigo),
        padre_codigo=data.padre_codigo,
        activo=True,
    )
    db.add(cuenta)
    db.commit()
    db.refresh(cuenta)
    logger.info("Cuenta contable creada: %s %s", cuenta.codigo, cuenta.nombre)
    return cuenta


# ---------------------------------------------------------------------------
# Empresas
# ---------------------------------------------------------------------------


def _empresa_response(empresa: Empresa) -> EmpresaResponse:
    return EmpresaResponse(
        id=empresa.id,
        numero_documento=empresa.numero_documento,
        digito_verificacion=empresa.digito_verificacion,
        nit=empresa.nit,
        nombre=empresa.nombre,
        regimen_tributario_id=empresa.regimen_tributario_id,
        es_agente_retenedor=empresa.es_agente_retenedor,
        municipio=empresa.municipio,
        activo=empresa.activo,
    )


def list_empresas(db: Session) -> list[EmpresaResponse]:
    empresas = (
        db.query(Empresa)
        .filter(Empresa.activo.is_(True))
        .order_by(Empresa.nombre)
        .all()
    )
    return [_empresa_response(e) for e in empresas]


def create_empresa(db: Session, data: EmpresaCreate) -> EmpresaResponse:
    """Register a paying company; its NIT check digit is computed.

    Raises:
        HTTPException 409: NIT already registered.
        HTTPException 422: Mismatching check digit or unknown régimen.
    """
    numero, dv = normalizar_documento("NIT", data.numero_documento, data.digito_verificacion)
    if db.query(Empresa.id).filter(Empresa.numero_documento == numero).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Ya existe una empresa con el NIT {numero}.",
        )
    if data.regimen_tributario_id is not None and (
        db.query(RegimenTributario.id)
        .filter(RegimenTributario.id == data.regimen_tributario_id)
        .first()
        is None
    ):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Régimen tributario con id={data.regimen_tributario_id} no existe.",
        )

    empresa = Empresa(
        numero_documento=numero,
        digito_verificacion=dv,
        nombre=data.nombre.strip(),
        regimen_tributario_id=data.regimen_tributario_id,
        es_agente_retenedor=data.es_agente_retenedor,
        municipio=data.municipio,
        activo=True,
    )
    db.add(empresa)
    db.commit()
    db.refresh(empresa)
    logger.info(
        "Empresa creada: id=%d nit=%s agente_retenedor=%s",
        empresa.id, empresa.nit, empresa.es_agente_retenedor,
    )
    return _empresa_response(empresa)


# ---------------------------------------------------------------------------
# Static catalogs
# ---------------------------------------------------------------------------


def list_departamentos() -> list[DepartamentoResponse]:
    return [DepartamentoResponse(**d) for d in sorted(DEPARTAMENTOS, key=lambda d: d["nombre"])]


def list_ciudades(departamento_codigo: str | None = None) -> list[CiudadResponse]:
    ciudades = [
        c for c in CIUDADES
        if departamento_codigo is None or c["departamento_codigo"] == departamento_codigo
    ]
    return [
        CiudadResponse(
            codigo=c["codigo"],
            nombre=c["nombre"],
            departamento_codigo=c["departamento_codigo"],
            departamento=DEPARTAMENTOS_POR_CODIGO.get(c["departamento_codigo"], ""),
        )
        for c in sorted(ciudades, key=lambda c: c["nombre"])
    ]


def list_tipos_documento() -> list[TipoDocumentoResponse]:
    return [TipoDocumentoResponse(codigo=k, nombre=v) for k, v in TIPOS_DOCUMENTO.items()]
