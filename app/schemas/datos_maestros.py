"""
Pydantic v2 schemas for the Master Data (Datos Maestros) module.

Most of these are read-only response schemas used by ``GET`` list endpoints
that power the dropdowns in the frontend.  Accounts and companies also have
create payloads.  ORM-backed models enable ``from_attributes=True`` so that
SQLAlchemy instances can be serialised directly.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# RegimenTributario
# ---------------------------------------------------------------------------


class RegimenTributarioResponse(BaseModel):
    """Tax regime as listed in the supplier form.

    Attributes:
        id: Primary key.
        codigo: Short code, e.g. ``"DECLARANTE"``.
        nombre: Display name.
        es_declarante: Members file income tax.
        aplica_iva: Members charge VAT.
        activo: Soft-delete flag.
    """

    id: int
    codigo: str
    nombre: str
    es_declarante: bool
    aplica_iva: bool
    activo: bool

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 4,
                "codigo": "PERSONA_JURIDICA",
                "nombre": "Persona Jurídica",
                "es_declarante": True,
                "aplica_iva": True,
                "activo": True,
            }
        },
    )


# ---------------------------------------------------------------------------
# CuentaContable
# ---------------------------------------------------------------------------


TipoCuenta = Literal["ACTIVO", "PASIVO", "PATRIMONIO", "INGRESO", "GASTO", "COSTO"]


class CuentaContableCreate(BaseModel):
    """Payload for adding an account to the chart (PUC)."""

    codigo: str = Field(..., min_length=1, max_length=20, pattern=r"^[0-9]+$")
    nombre: str = Field(..., min_length=1, max_length=200)
    tipo: TipoCuenta
    padre_codigo: str | None = Field(default=None, max_length=20)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "codigo": "236545",
                "nombre": "Retención por otros conceptos",
                "tipo": "PASIVO",
                "padre_codigo": "2365",
            }
        }
    )


class CuentaContableResponse(BaseModel):
    """Account entry.  ``nivel`` is the number of digits of the code."""

    id: int
    codigo: str
    nombre: str
    tipo: str
    nivel: int
    padre_codigo: str | None = None
    activo: bool

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Empresa
# ---------------------------------------------------------------------------


class EmpresaCreate(BaseModel):
    """Payload for registering a paying company.

    ``digito_verificacion`` is computed when omitted and validated otherwise.
    """

    numero_documento: str = Field(..., min_length=3, max_length=25, pattern=r"^[0-9.\- ]+$")
    digito_verificacion: str | None = Field(default=None, pattern=r"^[0-9]$")
    nombre: str = Field(..., min_length=2, max_length=300)
    regimen_tributario_id: int | None = Field(default=None, ge=1)
    es_agente_retenedor: bool = True
    municipio: str | None = Field(default=None, max_length=100)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "numero_documento": "900.123.456",
                "nombre": "MI EMPRESA SAS",
                "regimen_tributario_id": 4,
                "es_agente_retenedor": True,
                "municipio": "Bogotá D.C.",
            }
        }
    )


class EmpresaResponse(BaseModel):
    """Paying company with its withholding-agent flag."""

    id: int
    numero_documento: str
    digito_verificacion: str | None = None
    nit: str
    nombre: str
    regimen_tributario_id: int | None = None
    es_agente_retenedor: bool
    municipio: str | None = None
    activo: bool

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Geography (static DANE catalogs)
# ---------------------------------------------------------------------------


class DepartamentoResponse(BaseModel):
    codigo: str
    nombre: str


class CiudadResponse(BaseModel):
    codigo: str
    nombre: str
    departamento_codigo: str
    departamento: str


class TipoDocumentoResponse(BaseModel):
    codigo: str
    nombre: str
