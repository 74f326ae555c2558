"""
Retenciones — service layer around the pure calculator in ``app.core``.

Loads the supplier, the paying company, the concept catalog and the chart of
accounts, maps the ORM rows to the frozen domain records, runs
``calculate_retentions`` and shapes the response with totals and the
suggested credit lines.

Stale assignments (concepts deleted or deactivated after being assigned)
are tolerated by the calculator; this layer logs one warning per reference.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.entities import (
    AccountingAccount,
    AccountType,
    Company,
    PersonType,
    RetentionCalculationResult,
    RetentionConcept,
    Supplier,
    TaxRegime,
    TransactionType,
    VatResponsibility,
)
from app.core.exceptions import InvalidInputError
from app.core.nit import clean_nit, compute_check_digit, format_nit
from app.core.retenciones import (
    calculate_retentions,
    find_unresolved_references,
    net_payable,
    total_withheld,
)
from app.models.concepto_retencion import ConceptoRetencion
from app.models.cuenta_contable import CuentaContable
from app.models.empresa import Empresa
from app.models.proveedor import Proveedor
from app.models.regimen_tributario import RegimenTributario
from app.models.usuario import Usuario
from app.schemas.retencion import (
    AsientoContable,
    CalculoRetencionRequest,
    CalculoRetencionResponse,
    NitResponse,
    ResultadoRetencion,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ORM → domain mapping
# ---------------------------------------------------------------------------


def _to_tax_regime(regimen: RegimenTributario | None) -> TaxRegime | None:
    if regimen is None:
        return None
    return TaxRegime(
        code=regimen.codigo,
        name=regimen.nombre,
        is_filer_of_income_tax=regimen.es_declarante,
        applies_vat=regimen.aplica_iva,
        active=regimen.activo,
    )


def to_concept(concepto: ConceptoRetencion) -> RetentionConcept:
    return RetentionConcept(
        code=concepto.codigo,
        name=concepto.nombre,
        minimum_base=Decimal(str(concepto.base_minima)),
        rate=Decimal(str(concepto.tarifa)),
        account_code=concepto.cuenta_contable,
        active=concepto.activo,
        id=concepto.id,
    )


def to_account(cuenta: CuentaContable) -> AccountingAccount:
    return AccountingAccount(
        code=cuenta.codigo,
        name=cuenta.nombre,
        type=AccountType(cuenta.tipo),
        level=cuenta.nivel,
        parent=cuenta.padre_codigo,
        active=cuenta.activo,
    )


def to_supplier(proveedor: Proveedor) -> Supplier:
    """Build the calculator's view of a supplier.

    Assignments are referenced by concept ID, in their configured order.
    """

    def referencias(tipo: str) -> tuple[int, ...]:
        return tuple(
            a.concepto_id
            for a in sorted(proveedor.asignaciones, key=lambda a: a.orden)
            if a.tipo_transaccion == tipo
        )

    return Supplier(
        id=proveedor.id,
        tax_id=proveedor.nit,
        name=proveedor.nombre,
        tax_regime=_to_tax_regime(proveedor.regimen_tributario),
        vat_responsibility=VatResponsibility(proveedor.responsabilidad_iva),
        is_self_withholder=proveedor.autoretenedor,
        is_income_tax_filer=proveedor.declarante_renta,
        person_type=PersonType(proveedor.tipo_persona),
        primary_transaction_type=TransactionType(proveedor.tipo_transaccion_principal),
        assigned_goods_retention_concepts=referencias(TransactionType.GOODS.value),
        assigned_services_retention_concepts=referencias(TransactionType.SERVICES.value),
        registered_for_local_turnover_tax=proveedor.inscrito_ica_local,
        active=proveedor.activo,
        email=proveedor.email,
        phone=proveedor.telefono,
        address=proveedor.direccion,
        city=proveedor.ciudad,
        contact_name=proveedor.contacto_principal,
    )


def to_company(empresa: Empresa) -> Company:
    return Company(
        id=empresa.id,
        tax_id=empresa.nit,
        name=empresa.nombre,
        is_withholding_agent=empresa.es_agente_retenedor,
        tax_regime=_to_tax_regime(empresa.regimen_tributario),
        municipality=empresa.municipio,
        active=empresa.activo,
    )


def _to_resultado(result: RetentionCalculationResult) -> ResultadoRetencion:
    return ResultadoRetencion(
        concepto_codigo=result.concept.code,
        concepto_nombre=result.concept.name,
        tarifa=float(result.concept.rate),
        base_minima=float(result.concept.minimum_base),
        base_calculo=float(result.calculation_base),
        valor_retenido=float(result.withheld_amount),
        aplica=result.applies,
        motivo=result.reason,
        cuenta_contable=result.account.code if result.account else None,
        cuenta_nombre=result.account.name if result.account else None,
    )


def _asientos(results: list[RetentionCalculationResult]) -> list[AsientoContable]:
    """One credit line per applied concept with a resolved account."""
    return [
        AsientoContable(
            cuenta_contable=r.account.code,
            cuenta_nombre=r.account.name,
            concepto_codigo=r.concept.code,
            credito=float(r.withheld_amount),
        )
        for r in results
        if r.applies and r.account is not None and r.withheld_amount > 0
    ]


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------


def _resolver_empresa(db: Session, empresa_id: int | None, current_user: Usuario) -> Empresa:
    empresa_id = empresa_id or current_user.empresa_id
    if empresa_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Debe indicar la empresa pagadora (empresa_id).",
        )
    empresa = db.query(Empresa).filter(Empresa.id == empresa_id).first()
    if empresa is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Empresa con id={empresa_id} no encontrada.",
        )
    if not empresa.activo:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"La empresa pagadora id={empresa_id} está inactiva.",
        )
    return empresa


def calcular_retenciones(
    db: Session, data: CalculoRetencionRequest, current_user: Usuario
) -> CalculoRetencionResponse:
    """Run the withholding calculator for one payment.

    Args:
        db: Active SQLAlchemy session.
        data: Supplier, company, base and transaction type.
        current_user: Caller; supplies the default company.

    Returns:
        Results in assignment order plus totals and suggested credit lines.

    Raises:
        HTTPException 404: Unknown supplier or company.
        HTTPException 422: Missing or inactive company, bad base or bad type.
    """
    proveedor = db.query(Proveedor).filter(Proveedor.id == data.proveedor_id).first()
    if proveedor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Proveedor con id={data.proveedor_id} no encontrado.",
        )
    empresa = _resolver_empresa(db, data.empresa_id, current_user)

    supplier = to_supplier(proveedor)
    company = to_company(empresa)
    concepts = [to_concept(c) for c in db.query(ConceptoRetencion).all()]
    accounts = [
        to_account(c)
        for c in db.query(CuentaContable).filter(CuentaContable.activo.is_(True)).all()
    ]

    try:
        results = calculate_retentions(
            data.base, supplier, company, data.tipo_transaccion, concepts, accounts
        )
        unresolved = (
            find_unresolved_references(supplier, data.tipo_transaccion, concepts)
            if company.is_withholding_agent
            else []
        )
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    for ref in unresolved:
        logger.warning(
            "Proveedor %d: concepto %s asignado (%s) no existe o está inactivo; se omite",
            proveedor.id, ref.reference, ref.transaction_type,
        )

    total = total_withheld(results)
    neto = net_payable(data.base, results)
    logger.info(
        "Retenciones calculadas: proveedor=%d empresa=%d tipo=%s base=%s total=%s",
        proveedor.id, empresa.id, data.tipo_transaccion, data.base, total,
    )

    return CalculoRetencionResponse(
        proveedor_id=proveedor.id,
        proveedor_nit=proveedor.nit,
        empresa_id=empresa.id,
        es_agente_retenedor=empresa.es_agente_retenedor,
        tipo_transaccion=data.tipo_transaccion,
        base=float(data.base),
        resultados=[_to_resultado(r) for r in results],
        total_retenido=float(total),
        neto_a_pagar=float(neto),
        asientos=_asientos(results),
        referencias_no_resueltas=[ref.reference for ref in unresolved],
    )


def calcular_digito_verificacion(numero: str) -> NitResponse:
    """Compute the DIAN check digit and display form of a NIT number.

    Raises:
        HTTPException 422: If *numero* has no digits.
    """
    digits = clean_nit(numero)
    if not digits:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="El NIT debe contener dígitos.",
        )
    dv = compute_check_digit(digits)
    return NitResponse(
        numero=digits,
        digito_verificacion=dv,
        nit=f"{digits}-{dv}",
        nit_formateado=format_nit(digits, dv),
    )
