"""
Exportación — service layer.

Builds the supplier workbook: a ``Proveedores`` sheet with each supplier's
tax profile and assigned concept codes, and a ``Conceptos`` sheet with the
withholding catalog.  Returns raw bytes; the router wraps them in a
``StreamingResponse``.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.nit import format_nit
from app.exporters.excel_exporter import ExcelExporter
from app.models.concepto_retencion import ConceptoRetencion
from app.models.proveedor import Proveedor

logger = logging.getLogger(__name__)

_PROVEEDOR_HEADERS: list[str] = [
    "NIT / Documento",
    "Tipo doc.",
    "Nombre",
    "Ciudad",
    "Régimen",
    "Resp. IVA",
    "Plazo (días)",
    "Autorretenedor",
    "Declarante",
    "Tipo persona",
    "Transacción",
    "Retenciones bienes",
    "Retenciones servicios",
    "Estado",
]

_CONCEPTO_HEADERS: list[str] = [
    "Código",
    "Nombre",
    "Base mínima",
    "Tarifa %",
    "Cuenta",
    "Estado",
]


def _si_no(value: bool) -> str:
    return "Sí" if value else "No"


def _proveedor_row(p: Proveedor) -> list:
    return [
        format_nit(p.numero_documento, p.digito_verificacion),
        p.tipo_documento,
        p.nombre,
        p.ciudad or "",
        p.regimen_tributario.nombre if p.regimen_tributario else "",
        p.responsabilidad_iva,
        p.plazo_pago_dias,
        _si_no(p.autoretenedor),
        _si_no(p.declarante_renta),
        p.tipo_persona,
        p.tipo_transaccion_principal,
        ", ".join(c.codigo for c in p.conceptos_asignados("BIENES")),
        ", ".join(c.codigo for c in p.conceptos_asignados("SERVICIOS")),
        "Activo" if p.activo else "Inactivo",
    ]


def export_proveedores(db: Session, activo: bool | None = None) -> bytes:
    """Return the ``.xlsx`` bytes of the supplier export.

    Args:
        db: Active SQLAlchemy session.
        activo: Optional filter on the soft-delete flag.
    """
    q = db.query(Proveedor)
    if activo is not None:
        q = q.filter(Proveedor.activo.is_(activo))
    proveedores = q.order_by(Proveedor.nombre).all()
    conceptos = db.query(ConceptoRetencion).order_by(ConceptoRetencion.codigo).all()

    estado = "Todos" if activo is None else ("Activos" if activo else "Inactivos")
    exporter = ExcelExporter(
        title="Proveedores y retenciones",
        filters={"Estado": estado},
        sheet_name="Proveedores",
    )
    exporter.add_header()
    exporter.add_kpi_row({
        "Proveedores": len(proveedores),
        "Autorretenedores": sum(1 for p in proveedores if p.autoretenedor),
        "No declarantes": sum(1 for p in proveedores if not p.declarante_renta),
    })
    exporter.add_data_table(_PROVEEDOR_HEADERS, [_proveedor_row(p) for p in proveedores])

    exporter.add_sheet("Conceptos")
    exporter.add_data_table(
        _CONCEPTO_HEADERS,
        [
            [
                c.codigo,
                c.nombre,
                float(c.base_minima),
                float(c.tarifa),
                c.cuenta_contable or "",
                "Activo" if c.activo else "Inactivo",
            ]
            for c in conceptos
        ],
        money_cols={2},
        rate_cols={3},
    )

    file_bytes = exporter.finalize()
    logger.info(
        "export_proveedores: %d proveedores, %d conceptos, %d bytes",
        len(proveedores), len(conceptos), len(file_bytes),
    )
    return file_bytes
