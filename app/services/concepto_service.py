"""
Conceptos de retención — service layer.

CRUD over the withholding concept catalog.  Codes are unique and immutable
once created; deleting a concept only deactivates it so that historic
assignments keep pointing at a real row.  Inactive concepts are ignored by
the calculator and cannot be newly assigned.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.concepto_retencion import ConceptoRetencion
from app.models.cuenta_contable import CuentaContable
from app.schemas.retencion import ConceptoRetencionCreate, ConceptoRetencionUpdate

logger = logging.getLogger(__name__)


def _validar_cuenta(db: Session, codigo: str | None) -> None:
    if codigo is None:
        return
    exists = (
        db.query(CuentaContable.id)
        .filter(CuentaContable.codigo == codigo, CuentaContable.activo.is_(True))
        .first()
    )
    if exists is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Cuenta contable '{codigo}' no existe o está inactiva.",
        )


def list_conceptos(
    db: Session, activo: bool | None = None, q: str | None = None
) -> list[ConceptoRetencion]:
    """Return concepts ordered by code, optionally filtered."""
    query = db.query(ConceptoRetencion)
    if activo is not None:
        query = query.filter(ConceptoRetencion.activo.is_(activo))
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(
            ConceptoRetencion.codigo.ilike(pattern) | ConceptoRetencion.nombre.ilike(pattern)
        )
    conceptos = query.order_by(ConceptoRetencion.codigo.asc()).all()
    logger.debug("list_conceptos: %d records", len(conceptos))
    return conceptos


def get_concepto(db: Session, concepto_id: int) -> ConceptoRetencion:
    """Fetch a concept by primary key or raise 404."""
    concepto = db.query(ConceptoRetencion).filter(ConceptoRetencion.id == concepto_id).first()
    if concepto is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Concepto de retención con id={concepto_id} no encontrado.",
        )
    return concepto


def create_concepto(db: Session, data: ConceptoRetencionCreate) -> ConceptoRetencion:
    """Add a concept to the catalog.

    Raises:
        HTTPException 409: Code already in use.
        HTTPException 422: Unknown accounting account.
    """
    codigo = data.codigo.strip().upper()
    if db.query(ConceptoRetencion.id).filter(ConceptoRetencion.codigo == codigo).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Ya existe un concepto de retención con código '{codigo}'.",
        )
    _validar_cuenta(db, data.cuenta_contable)

    concepto = ConceptoRetencion(
        codigo=codigo,
        nombre=data.nombre.strip(),
        base_minima=data.base_minima,
        tarifa=data.tarifa,
        cuenta_contable=data.cuenta_contable,
        activo=True,
    )
    db.add(concepto)
    db.commit()
    db.refresh(concepto)
    logger.info(
        "Concepto creado: %s tarifa=%s base_minima=%s",
        concepto.codigo, concepto.tarifa, concepto.base_minima,
    )
    return concepto


def update_concepto(
    db: Session, concepto_id: int, data: ConceptoRetencionUpdate
) -> ConceptoRetencion:
    """Partial update; the code itself cannot change."""
    concepto = get_concepto(db, concepto_id)
    changes = data.model_dump(exclude_unset=True)
    if "cuenta_contable" in changes:
        _validar_cuenta(db, changes["cuenta_contable"])

    for field, value in changes.items():
        # Only the account may be cleared
        if value is None and field != "cuenta_contable":
            continue
        setattr(concepto, field, value)

    db.commit()
    db.refresh(concepto)
    logger.info("Concepto actualizado: %s campos=%s", concepto.codigo, sorted(changes))
    return concepto


def delete_concepto(db: Session, concepto_id: int) -> ConceptoRetencion:
    """Deactivate a concept.  Existing assignments stay but stop applying."""
    concepto = get_concepto(db, concepto_id)
    concepto.activo = False
    db.commit()
    db.refresh(concepto)
    logger.info("Concepto desactivado: %s", concepto.codigo)
    return concepto
