"""
Pydantic v2 schemas for retention concepts and the withholding calculator.

Monetary amounts travel as ``Decimal`` on input and are serialised as plain
numbers on output.  Rates are percentages (``2.5`` means 2.5 %).
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# ConceptoRetencion: catalog CRUD
# ---------------------------------------------------------------------------


class ConceptoRetencionCreate(BaseModel):
    """Payload for creating a retention concept.

    Attributes:
        codigo: Unique three-character code, e.g. ``"001"``.
        nombre: Description (max 100 characters).
        base_minima: Minimum base in pesos (>= 0).
        tarifa: Rate in percent, 0 to 100.
        cuenta_contable: Liability account credited, e.g. ``"236540"``.
    """

    codigo: str = Field(..., min_length=1, max_length=3, pattern=r"^[0-9A-Za-z]+$")
    nombre: str = Field(..., min_length=1, max_length=100)
    base_minima: Decimal = Field(default=Decimal("0"), ge=0, max_digits=15, decimal_places=2)
    tarifa: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    cuenta_contable: str | None = Field(default=None, max_length=20)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "codigo": "013",
                "nombre": "Servicios de vigilancia",
                "base_minima": 99598,
                "tarifa": 2,
                "cuenta_contable": "236525",
            }
        }
    )


class ConceptoRetencionUpdate(BaseModel):
    """Partial update of a retention concept; absent fields are untouched."""

    nombre: str | None = Field(default=None, min_length=1, max_length=100)
    base_minima: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    tarifa: Decimal | None = Field(default=None, ge=0, le=100, max_digits=5, decimal_places=2)
    cuenta_contable: str | None = Field(default=None, max_length=20)
    activo: bool | None = None


class ConceptoRetencionResponse(BaseModel):
    """Public representation of a retention concept."""

    id: int
    codigo: str
    nombre: str
    base_minima: float
    tarifa: float
    cuenta_contable: str | None = None
    activo: bool
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


class CalculoRetencionRequest(BaseModel):
    """Input for ``POST /retenciones/calcular``.

    Attributes:
        proveedor_id: Supplier being paid.
        empresa_id: Paying company; defaults to the user's company.
        base: Taxable base in pesos, before withholding.
        tipo_transaccion: ``BIENES`` or ``SERVICIOS``.
    """

    proveedor_id: int = Field(..., ge=1)
    empresa_id: int | None = Field(default=None, ge=1)
    base: Decimal = Field(
        ..., max_digits=18, decimal_places=2, description="Base gravable en pesos."
    )
    tipo_transaccion: Literal["BIENES", "SERVICIOS"]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "proveedor_id": 1,
                "empresa_id": 1,
                "base": 5000000,
                "tipo_transaccion": "SERVICIOS",
            }
        }
    )


class ResultadoRetencion(BaseModel):
    """One calculated concept line.

    Attributes:
        concepto_codigo: Concept code.
        concepto_nombre: Concept description.
        tarifa: Rate applied (percent).
        base_minima: Threshold configured on the concept.
        base_calculo: Base used for the calculation.
        valor_retenido: Amount withheld, rounded to whole pesos.
        aplica: Whether the base reached the threshold.
        motivo: Reason text when the concept does not apply.
        cuenta_contable: Resolved account code, or ``None``.
        cuenta_nombre: Resolved account name, or ``None``.
    """

    concepto_codigo: str
    concepto_nombre: str
    tarifa: float
    base_minima: float
    base_calculo: float
    valor_retenido: float
    aplica: bool
    motivo: str | None = None
    cuenta_contable: str | None = None
    cuenta_nombre: str | None = None


class AsientoContable(BaseModel):
    """Credit line proposed for an applied withholding."""

    cuenta_contable: str
    cuenta_nombre: str | None = None
    concepto_codigo: str
    credito: float


class CalculoRetencionResponse(BaseModel):
    """Calculator output with totals.

    Attributes:
        proveedor_id: Supplier evaluated.
        proveedor_nit: Supplier NIT as ``numero-dv``.
        empresa_id: Paying company.
        es_agente_retenedor: Whether the company withholds at all.
        tipo_transaccion: Transaction type evaluated.
        base: Input base.
        resultados: One entry per assigned concept, in assignment order.
        total_retenido: Sum of withheld amounts.
        neto_a_pagar: ``base - total_retenido``.
        asientos: Credit lines for concepts that applied and have an account.
        referencias_no_resueltas: Assigned references that did not resolve.
    """

    proveedor_id: int
    proveedor_nit: str
    empresa_id: int
    es_agente_retenedor: bool
    tipo_transaccion: str
    base: float
    resultados: list[ResultadoRetencion]
    total_retenido: float
    neto_a_pagar: float
    asientos: list[AsientoContable] = Field(default_factory=list)
    referencias_no_resueltas: list[str] = Field(default_factory=list)


class NitResponse(BaseModel):
    """Check-digit computation for a NIT number."""

    numero: str
    digito_verificacion: str
    nit: str
    nit_formateado: str
