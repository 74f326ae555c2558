"""
Proveedores — service layer.

All database access for the ``/api/proveedores`` endpoints lives here.
Functions receive a SQLAlchemy ``Session``, validate references, and return
ORM instances or schema instances ready for serialisation by FastAPI.

Design notes
------------
- Document numbers are stored digits-only.  For ``NIT`` documents the check
  digit is computed with ``app.core.nit``; an explicit digit that does not
  match is rejected with 422.
- Concept assignments live in ``ProveedorConcepto`` rows.  Each transaction
  type keeps its own 1-based ``orden`` so the calculator sees the concepts in
  the order the user configured them.
- Only active concepts can be assigned.  Unknown or inactive IDs are
  rejected with 422 listing the offending IDs.
- DELETE is a soft delete (``activo = False``).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.nit import clean_nit, compute_check_digit, format_nit
from app.models.concepto_retencion import ConceptoRetencion
from app.models.proveedor import Proveedor
from app.models.proveedor_concepto import ProveedorConcepto
from app.models.regimen_tributario import RegimenTributario
from app.schemas.common import PaginationParams
from app.schemas.proveedor import (
    AsignacionMasivaRequest,
    AsignacionMasivaResponse,
    AsignacionRetencionesRequest,
    ConceptoAsignadoResponse,
    ProveedorCreate,
    ProveedorListResponse,
    ProveedorResponse,
    ProveedorUpdate,
)
from app.utils.constants import CIUDADES_POR_CODIGO, DEPARTAMENTOS_POR_CODIGO

logger = logging.getLogger(__name__)

_TIPOS_LISTA: tuple[str, str] = ("BIENES", "SERVICIOS")

# Fields an update may clear with an explicit null
_CAMPOS_NULOS: frozenset[str] = frozenset(
    {"email", "telefono", "direccion", "contacto_principal", "regimen_tributario_id"}
)


# ---------------------------------------------------------------------------
# Document helpers (shared with Empresa)
# ---------------------------------------------------------------------------


def normalizar_documento(
    tipo_documento: str, numero_documento: str, digito_verificacion: str | None
) -> tuple[str, str | None]:
    """Return ``(digits, check_digit)`` for a document.

    NIT documents always get a check digit: the computed one, which must
    equal *digito_verificacion* when the caller supplied it.  Other document
    types carry no check digit.

    Raises:
        HTTPException 422: Number without digits or mismatching check digit.
    """
    numero = clean_nit(numero_documento)
    if not numero:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="El número de documento debe contener dígitos.",
        )

    if tipo_documento != "NIT":
        return numero, None

    calculado = compute_check_digit(numero)
    if digito_verificacion is not None and digito_verificacion != calculado:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"Dígito de verificación inválido para el NIT {numero}: "
                f"se recibió {digito_verificacion}, corresponde {calculado}."
            ),
        )
    return numero, calculado


def _aplicar_ciudad(proveedor: Proveedor, ciudad_codigo: str | None) -> None:
    """Fill city and department names from the DANE code."""
    if ciudad_codigo is None:
        proveedor.ciudad_codigo = None
        proveedor.ciudad = None
        proveedor.departamento_codigo = None
        proveedor.departamento = None
        return

    ciudad = CIUDADES_POR_CODIGO.get(ciudad_codigo)
    if ciudad is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Ciudad con código '{ciudad_codigo}' no existe.",
        )
    proveedor.ciudad_codigo = ciudad["codigo"]
    proveedor.ciudad = ciudad["nombre"]
    proveedor.departamento_codigo = ciudad["departamento_codigo"]
    proveedor.departamento = DEPARTAMENTOS_POR_CODIGO.get(ciudad["departamento_codigo"])


def _validar_regimen(db: Session, regimen_id: int | None) -> None:
    if regimen_id is None:
        return
    exists = (
        db.query(RegimenTributario.id)
        .filter(RegimenTributario.id == regimen_id, RegimenTributario.activo.is_(True))
        .first()
    )
    if exists is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Régimen tributario con id={regimen_id} no existe o está inactivo.",
        )


def _check_documento_unico(
    db: Session, numero_documento: str, exclude_id: int | None = None
) -> None:
    q = db.query(Proveedor.id).filter(Proveedor.numero_documento == numero_documento)
    if exclude_id is not None:
        q = q.filter(Proveedor.id != exclude_id)
    if q.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Ya existe un proveedor con el documento {numero_documento}.",
        )


# ---------------------------------------------------------------------------
# Concept assignment helpers
# ---------------------------------------------------------------------------


def _cargar_conceptos_activos(
    db: Session, concepto_ids: list[int]
) -> list[ConceptoRetencion]:
    """Load concepts in the requested order, dropping repeated IDs.

    Raises:
        HTTPException 422: If any ID is unknown or refers to an inactive concept.
    """
    ids_unicos = list(dict.fromkeys(concepto_ids))
    if not ids_unicos:
        return []

    encontrados = {
        c.id: c
        for c in db.query(ConceptoRetencion)
        .filter(ConceptoRetencion.id.in_(ids_unicos))
        .all()
    }
    invalidos = [
        cid for cid in ids_unicos
        if cid not in encontrados or not encontrados[cid].activo
    ]
    if invalidos:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Conceptos de retención inexistentes o inactivos: {invalidos}",
        )
    return [encontrados[cid] for cid in ids_unicos]


def _reemplazar_asignaciones(
    db: Session,
    proveedor: Proveedor,
    tipo_transaccion: str,
    conceptos: list[ConceptoRetencion],
) -> None:
    """Replace the supplier's list for *tipo_transaccion* with *conceptos*."""
    for asignacion in [a for a in proveedor.asignaciones if a.tipo_transaccion == tipo_transaccion]:
        proveedor.asignaciones.remove(asignacion)
    # Orphans must be deleted before re-inserting rows with the same key
    db.flush()

    for orden, concepto in enumerate(conceptos, start=1):
        proveedor.asignaciones.append(
            ProveedorConcepto(
                concepto_id=concepto.id,
                concepto=concepto,
                tipo_transaccion=tipo_transaccion,
                orden=orden,
            )
        )


def _concepto_asignado(concepto: ConceptoRetencion) -> ConceptoAsignadoResponse:
    return ConceptoAsignadoResponse(
        id=concepto.id,
        codigo=concepto.codigo,
        nombre=concepto.nombre,
        tarifa=float(concepto.tarifa),
        base_minima=float(concepto.base_minima),
        activo=concepto.activo,
    )


def to_response(proveedor: Proveedor) -> ProveedorResponse:
    """Serialise a supplier row with its régimen name and concept lists."""
    return ProveedorResponse(
        id=proveedor.id,
        tipo_documento=proveedor.tipo_documento,
        numero_documento=proveedor.numero_documento,
        digito_verificacion=proveedor.digito_verificacion,
        nit=proveedor.nit,
        nit_formateado=format_nit(proveedor.numero_documento, proveedor.digito_verificacion),
        nombre=proveedor.nombre,
        email=proveedor.email,
        telefono=proveedor.telefono,
        direccion=proveedor.direccion,
        ciudad_codigo=proveedor.ciudad_codigo,
        ciudad=proveedor.ciudad,
        departamento_codigo=proveedor.departamento_codigo,
        departamento=proveedor.departamento,
        contacto_principal=proveedor.contacto_principal,
        plazo_pago_dias=proveedor.plazo_pago_dias,
        regimen_tributario_id=proveedor.regimen_tributario_id,
        regimen_tributario=(
            proveedor.regimen_tributario.nombre if proveedor.regimen_tributario else None
        ),
        responsabilidad_iva=proveedor.responsabilidad_iva,
        autoretenedor=proveedor.autoretenedor,
        declarante_renta=proveedor.declarante_renta,
        tipo_persona=proveedor.tipo_persona,
        tipo_transaccion_principal=proveedor.tipo_transaccion_principal,
        inscrito_ica_local=proveedor.inscrito_ica_local,
        activo=proveedor.activo,
        conceptos_bienes=[
            _concepto_asignado(c) for c in proveedor.conceptos_asignados("BIENES")
        ],
        conceptos_servicios=[
            _concepto_asignado(c) for c in proveedor.conceptos_asignados("SERVICIOS")
        ],
        created_at=proveedor.created_at,
        updated_at=proveedor.updated_at,
    )


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


def _apply_search(query: Any, q: str | None, activo: bool | None) -> Any:
    """Filter by free text over name, document, email, phone and city."""
    if activo is not None:
        query = query.filter(Proveedor.activo.is_(activo))
    if q:
        pattern = f"%{q.strip()}%"
        conditions = [
            Proveedor.nombre.ilike(pattern),
            Proveedor.numero_documento.ilike(pattern),
            Proveedor.email.ilike(pattern),
            Proveedor.telefono.ilike(pattern),
            Proveedor.ciudad.ilike(pattern),
        ]
        # "900.123.456" should match the stored digits-only number
        digits = clean_nit(q.split("-")[0])
        if digits:
            conditions.append(Proveedor.numero_documento.like(f"%{digits}%"))
        query = query.filter(or_(*conditions))
    return query


def list_proveedores(
    db: Session,
    pagination: PaginationParams,
    q: str | None = None,
    activo: bool | None = None,
) -> ProveedorListResponse:
    """Return a paginated supplier table ordered by name.

    Args:
        db: Active SQLAlchemy session.
        pagination: Page number and size.
        q: Optional free-text search.
        activo: Optional filter on the soft-delete flag.
    """
    total: int = _apply_search(db.query(func.count(Proveedor.id)), q, activo).scalar() or 0
    rows = (
        _apply_search(db.query(Proveedor), q, activo)
        .order_by(Proveedor.nombre.asc(), Proveedor.id.asc())
        .offset(pagination.offset)
        .limit(pagination.page_size)
        .all()
    )

    logger.debug(
        "list_proveedores: q=%r page=%d size=%d total=%d returned=%d",
        q, pagination.page, pagination.page_size, total, len(rows),
    )
    return ProveedorListResponse(
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
        items=[to_response(p) for p in rows],
    )


def get_proveedor(db: Session, proveedor_id: int) -> Proveedor:
    """Fetch a supplier by primary key.

    Raises:
        HTTPException 404: If no supplier with ``proveedor_id`` exists.
    """
    proveedor = db.query(Proveedor).filter(Proveedor.id == proveedor_id).first()
    if proveedor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Proveedor con id={proveedor_id} no encontrado.",
        )
    return proveedor


def create_proveedor(db: Session, data: ProveedorCreate) -> Proveedor:
    """Register a new supplier with its initial concept assignments.

    Raises:
        HTTPException 409: Document number already registered.
        HTTPException 422: Bad check digit, unknown city, régimen or concepts.
    """
    numero, dv = normalizar_documento(
        data.tipo_documento, data.numero_documento, data.digito_verificacion
    )
    _check_documento_unico(db, numero)
    _validar_regimen(db, data.regimen_tributario_id)
    conceptos_bienes = _cargar_conceptos_activos(db, data.conceptos_bienes)
    conceptos_servicios = _cargar_conceptos_activos(db, data.conceptos_servicios)

    proveedor = Proveedor(
        tipo_documento=data.tipo_documento,
        numero_documento=numero,
        digito_verificacion=dv,
        nombre=data.nombre.strip(),
        email=data.email,
        telefono=data.telefono,
        direccion=data.direccion,
        contacto_principal=data.contacto_principal,
        plazo_pago_dias=data.plazo_pago_dias,
        regimen_tributario_id=data.regimen_tributario_id,
        responsabilidad_iva=data.responsabilidad_iva,
        autoretenedor=data.autoretenedor,
        declarante_renta=data.declarante_renta,
        tipo_persona=data.tipo_persona,
        tipo_transaccion_principal=data.tipo_transaccion_principal,
        inscrito_ica_local=data.inscrito_ica_local,
        activo=True,
    )
    _aplicar_ciudad(proveedor, data.ciudad_codigo)
    db.add(proveedor)
    db.flush()

    _reemplazar_asignaciones(db, proveedor, "BIENES", conceptos_bienes)
    _reemplazar_asignaciones(db, proveedor, "SERVICIOS", conceptos_servicios)

    db.commit()
    db.refresh(proveedor)
    logger.info("Proveedor creado: id=%d nit=%s", proveedor.id, proveedor.nit)
    return proveedor


def update_proveedor(db: Session, proveedor_id: int, data: ProveedorUpdate) -> Proveedor:
    """Apply a partial update; the check digit follows the document number.

    Raises:
        HTTPException 404: Unknown supplier.
        HTTPException 409: New document number already registered.
        HTTPException 422: Bad check digit, city or régimen.
    """
    proveedor = get_proveedor(db, proveedor_id)
    changes = data.model_dump(exclude_unset=True)

    if {"tipo_documento", "numero_documento", "digito_verificacion"} & changes.keys():
        tipo = changes.get("tipo_documento") or proveedor.tipo_documento
        numero, dv = normalizar_documento(
            tipo,
            changes.get("numero_documento") or proveedor.numero_documento,
            changes.get("digito_verificacion"),
        )
        if numero != proveedor.numero_documento:
            _check_documento_unico(db, numero, exclude_id=proveedor.id)
        proveedor.tipo_documento = tipo
        proveedor.numero_documento = numero
        proveedor.digito_verificacion = dv

    if "ciudad_codigo" in changes:
        _aplicar_ciudad(proveedor, changes["ciudad_codigo"])
    if "regimen_tributario_id" in changes:
        _validar_regimen(db, changes["regimen_tributario_id"])

    skip = {"tipo_documento", "numero_documento", "digito_verificacion", "ciudad_codigo"}
    for field, value in changes.items():
        if field in skip:
            continue
        if value is None and field not in _CAMPOS_NULOS:
            continue
        if field == "nombre":
            value = value.strip()
        setattr(proveedor, field, value)

    db.commit()
    db.refresh(proveedor)
    logger.info(
        "Proveedor actualizado: id=%d campos=%s", proveedor.id, sorted(changes.keys())
    )
    return proveedor


def delete_proveedor(db: Session, proveedor_id: int) -> Proveedor:
    """Soft-delete a supplier.  Its assignments are kept for reactivation."""
    proveedor = get_proveedor(db, proveedor_id)
    proveedor.activo = False
    db.commit()
    db.refresh(proveedor)
    logger.info("Proveedor desactivado: id=%d", proveedor.id)
    return proveedor


def asignar_retenciones(
    db: Session, proveedor_id: int, data: AsignacionRetencionesRequest
) -> Proveedor:
    """Replace both ordered concept lists of a supplier.

    Raises:
        HTTPException 404: Unknown supplier.
        HTTPException 422: Unknown or inactive concept IDs.
    """
    proveedor = get_proveedor(db, proveedor_id)
    conceptos_bienes = _cargar_conceptos_activos(db, data.conceptos_bienes)
    conceptos_servicios = _cargar_conceptos_activos(db, data.conceptos_servicios)

    _reemplazar_asignaciones(db, proveedor, "BIENES", conceptos_bienes)
    _reemplazar_asignaciones(db, proveedor, "SERVICIOS", conceptos_servicios)

    db.commit()
    db.refresh(proveedor)
    logger.info(
        "Retenciones asignadas: proveedor=%d bienes=%s servicios=%s",
        proveedor.id,
        [c.codigo for c in conceptos_bienes],
        [c.codigo for c in conceptos_servicios],
    )
    return proveedor


def asignacion_masiva(
    db: Session, data: AsignacionMasivaRequest
) -> AsignacionMasivaResponse:
    """Add or remove a set of concepts on many suppliers in one transaction.

    ``ASIGNAR`` appends each missing concept at the end of the affected
    list(s); ``REMOVER`` deletes the matching assignments and renumbers the
    remaining ones.

    Raises:
        HTTPException 404: Any supplier ID does not exist.
        HTTPException 422: ``ASIGNAR`` with unknown or inactive concepts.
    """
    proveedor_ids = list(dict.fromkeys(data.proveedor_ids))
    proveedores = db.query(Proveedor).filter(Proveedor.id.in_(proveedor_ids)).all()
    faltantes = sorted(set(proveedor_ids) - {p.id for p in proveedores})
    if faltantes:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Proveedores no encontrados: {faltantes}",
        )

    tipos = _TIPOS_LISTA if data.tipo_transaccion == "AMBOS" else (data.tipo_transaccion,)
    creadas = 0
    eliminadas = 0
    actualizados = 0

    if data.accion == "ASIGNAR":
        conceptos = _cargar_conceptos_activos(db, data.concepto_ids)
        for proveedor in proveedores:
            cambiado = False
            for tipo in tipos:
                actuales = [a for a in proveedor.asignaciones if a.tipo_transaccion == tipo]
                ya_asignados = {a.concepto_id for a in actuales}
                siguiente = max((a.orden for a in actuales), default=0) + 1
                for concepto in conceptos:
                    if concepto.id in ya_asignados:
                        continue
                    proveedor.asignaciones.append(
                        ProveedorConcepto(
                            concepto_id=concepto.id,
                            concepto=concepto,
                            tipo_transaccion=tipo,
                            orden=siguiente,
                        )
                    )
                    siguiente += 1
                    creadas += 1
                    cambiado = True
            actualizados += int(cambiado)
    else:
        remover = set(data.concepto_ids)
        for proveedor in proveedores:
            cambiado = False
            for tipo in tipos:
                actuales = sorted(
                    (a for a in proveedor.asignaciones if a.tipo_transaccion == tipo),
                    key=lambda a: a.orden,
                )
                restantes = [a for a in actuales if a.concepto_id not in remover]
                if len(restantes) == len(actuales):
                    continue
                for asignacion in actuales:
                    if asignacion.concepto_id in remover:
                        proveedor.asignaciones.remove(asignacion)
                        eliminadas += 1
                for orden, asignacion in enumerate(restantes, start=1):
                    asignacion.orden = orden
                cambiado = True
            actualizados += int(cambiado)

    db.commit()
    logger.info(
        "Asignación masiva %s: proveedores=%d creadas=%d eliminadas=%d",
        data.accion, actualizados, creadas, eliminadas,
    )
    return AsignacionMasivaResponse(
        accion=data.accion,
        proveedores_actualizados=actualizados,
        asignaciones_creadas=creadas,
        asignaciones_eliminadas=eliminadas,
    )
