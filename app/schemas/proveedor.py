"""
Pydantic v2 schemas for the Proveedores module.

These models define the JSON shapes consumed and returned by
``app/routers/proveedores.py``.  They are free of SQLAlchemy imports; the
service builds ``ProveedorResponse`` from ORM rows explicitly because the
assigned concepts come from an association object.

Domain context
--------------
A supplier carries the tax profile the withholding calculator reads
(régimen, IVA responsibility, person type, income-tax filer, self-withholder)
and two ordered lists of retention concepts: one applied when buying goods
(BIENES) and one when contracting services (SERVICIOS).
"""

from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

TipoDocumento = Literal["NIT", "CC", "CE", "PAS", "TI", "RC"]
ResponsabilidadIva = Literal["RESPONSABLE", "NO_RESPONSABLE"]
TipoPersona = Literal["NATURAL", "JURIDICA"]
TipoTransaccion = Literal["BIENES", "SERVICIOS", "AMBOS"]


# ---------------------------------------------------------------------------
# Input schemas: write operations
# ---------------------------------------------------------------------------


class ProveedorCreate(BaseModel):
    """Payload for registering a supplier (POST /).

    ``digito_verificacion`` is optional for NIT documents: when omitted it is
    computed; when supplied it must match the DIAN algorithm.

    Attributes:
        tipo_documento: Document type code.
        numero_documento: Document number; dots and dashes are stripped.
        digito_verificacion: Optional NIT check digit.
        nombre: Legal or full name.
        email: Contact email.
        telefono: Contact phone.
        direccion: Address.
        ciudad_codigo: DANE city code; fills city and department names.
        contacto_principal: Main contact person.
        plazo_pago_dias: Payment terms in days.
        regimen_tributario_id: FK to RegimenTributario.
        responsabilidad_iva: IVA responsibility.
        autoretenedor: Self-withholder flag.
        declarante_renta: Income-tax filer flag.
        tipo_persona: Natural or legal person.
        tipo_transaccion_principal: Main kind of purchases from this supplier.
        inscrito_ica_local: Registered for local ICA.
        conceptos_bienes: Ordered concept IDs applied to goods purchases.
        conceptos_servicios: Ordered concept IDs applied to services.
    """

    tipo_documento: TipoDocumento = Field(default="NIT", description="Tipo de documento.")
    numero_documento: str = Field(
        ...,
        min_length=3,
        max_length=25,
        pattern=r"^[0-9.\- ]+$",
        description="Número de documento, ej. '900.123.456'.",
    )
    digito_verificacion: str | None = Field(
        default=None,
        pattern=r"^[0-9]$",
        description="Dígito de verificación (solo NIT). Se calcula si se omite.",
    )
    nombre: str = Field(..., min_length=2, max_length=300, description="Razón social o nombre.")
    email: EmailStr | None = Field(default=None, description="Correo de contacto.")
    telefono: str | None = Field(default=None, max_length=50)
    direccion: str | None = Field(default=None, max_length=500)
    ciudad_codigo: str | None = Field(
        default=None,
        pattern=r"^[0-9]{5}$",
        description="Código DANE de la ciudad, ej. '11001'.",
    )
    contacto_principal: str | None = Field(default=None, max_length=200)
    plazo_pago_dias: int = Field(default=30, ge=0, le=365, description="Plazo de pago en días.")
    regimen_tributario_id: int | None = Field(default=None, ge=1)
    responsabilidad_iva: ResponsabilidadIva = "RESPONSABLE"
    autoretenedor: bool = False
    declarante_renta: bool = True
    tipo_persona: TipoPersona = "JURIDICA"
    tipo_transaccion_principal: TipoTransaccion = "AMBOS"
    inscrito_ica_local: bool = False
    conceptos_bienes: list[int] = Field(
        default_factory=list,
        description="IDs de conceptos de retención para compras de bienes (en orden).",
    )
    conceptos_servicios: list[int] = Field(
        default_factory=list,
        description="IDs de conceptos de retención para servicios (en orden).",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tipo_documento": "NIT",
                "numero_documento": "800.197.268",
                "nombre": "SUMINISTROS INDUSTRIALES SAS",
                "email": "compras@suministros.com.co",
                "telefono": "6015551234",
                "ciudad_codigo": "11001",
                "regimen_tributario_id": 1,
                "responsabilidad_iva": "RESPONSABLE",
                "declarante_renta": True,
                "tipo_persona": "JURIDICA",
                "tipo_transaccion_principal": "BIENES",
                "conceptos_bienes": [1],
                "conceptos_servicios": [],
            }
        }
    )


class ProveedorUpdate(BaseModel):
    """Payload for partial update of a supplier (PUT /{id}).

    All fields are optional; only those present in the body are written.
    Concept assignments are managed through ``PUT /{id}/retenciones``.
    """

    tipo_documento: TipoDocumento | None = None
    numero_documento: str | None = Field(
        default=None, min_length=3, max_length=25, pattern=r"^[0-9.\- ]+$"
    )
    digito_verificacion: str | None = Field(default=None, pattern=r"^[0-9]$")
    nombre: str | None = Field(default=None, min_length=2, max_length=300)
    email: EmailStr | None = None
    telefono: str | None = Field(default=None, max_length=50)
    direccion: str | None = Field(default=None, max_length=500)
    ciudad_codigo: str | None = Field(default=None, pattern=r"^[0-9]{5}$")
    contacto_principal: str | None = Field(default=None, max_length=200)
    plazo_pago_dias: int | None = Field(default=None, ge=0, le=365)
    regimen_tributario_id: int | None = Field(default=None, ge=1)
    responsabilidad_iva: ResponsabilidadIva | None = None
    autoretenedor: bool | None = None
    declarante_renta: bool | None = None
    tipo_persona: TipoPersona | None = None
    tipo_transaccion_principal: TipoTransaccion | None = None
    inscrito_ica_local: bool | None = None
    activo: bool | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "telefono": "6017654321",
                "declarante_renta": False,
            }
        }
    )


class AsignacionRetencionesRequest(BaseModel):
    """Replace a supplier's concept lists (PUT /{id}/retenciones).

    The list order is the order in which the calculator reports results.

    Attributes:
        conceptos_bienes: Ordered concept IDs for goods purchases.
        conceptos_servicios: Ordered concept IDs for services.
    """

    conceptos_bienes: list[int] = Field(default_factory=list)
    conceptos_servicios: list[int] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"conceptos_bienes": [1], "conceptos_servicios": [3, 5]}
        }
    )


class AsignacionMasivaRequest(BaseModel):
    """Assign or remove concepts on many suppliers at once (POST /asignacion-masiva).

    Attributes:
        proveedor_ids: Target suppliers.
        concepto_ids: Concepts to add or remove.
        tipo_transaccion: List affected; ``AMBOS`` touches both lists.
        accion: ``ASIGNAR`` appends missing concepts at the end of each list,
                ``REMOVER`` deletes them.
    """

    proveedor_ids: list[int] = Field(..., min_length=1)
    concepto_ids: list[int] = Field(..., min_length=1)
    tipo_transaccion: TipoTransaccion = "AMBOS"
    accion: Literal["ASIGNAR", "REMOVER"]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "proveedor_ids": [1, 2, 3],
                "concepto_ids": [3],
                "tipo_transaccion": "SERVICIOS",
                "accion": "ASIGNAR",
            }
        }
    )


# ---------------------------------------------------------------------------
# Response schemas: read operations
# ---------------------------------------------------------------------------


class ConceptoAsignadoResponse(BaseModel):
    """Compact concept reference embedded in a supplier response."""

    id: int
    codigo: str
    nombre: str
    tarifa: float
    base_minima: float
    activo: bool


class ProveedorResponse(BaseModel):
    """Full supplier record with its withholding configuration.

    ``nit`` is ``numero-dv`` (or the bare number for non-NIT documents) and
    ``nit_formateado`` groups thousands with dots for display.
    """

    id: int
    tipo_documento: str
    numero_documento: str
    digito_verificacion: str | None = None
    nit: str
    nit_formateado: str
    nombre: str
    email: str | None = None
    telefono: str | None = None
    direccion: str | None = None
    ciudad_codigo: str | None = None
    ciudad: str | None = None
    departamento_codigo: str | None = None
    departamento: str | None = None
    contacto_principal: str | None = None
    plazo_pago_dias: int
    regimen_tributario_id: int | None = None
    regimen_tributario: str | None = Field(default=None, description="Nombre del régimen (join).")
    responsabilidad_iva: str
    autoretenedor: bool
    declarante_renta: bool
    tipo_persona: str
    tipo_transaccion_principal: str
    inscrito_ica_local: bool
    activo: bool
    conceptos_bienes: list[ConceptoAsignadoResponse] = Field(default_factory=list)
    conceptos_servicios: list[ConceptoAsignadoResponse] = Field(default_factory=list)
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class ProveedorListResponse(BaseModel):
    """Paginated supplier table."""

    total: int
    page: int
    page_size: int
    items: list[ProveedorResponse]


class AsignacionMasivaResponse(BaseModel):
    """Counters returned by the bulk assignment endpoint."""

    accion: str
    proveedores_actualizados: int
    asignaciones_creadas: int = 0
    asignaciones_eliminadas: int = 0
