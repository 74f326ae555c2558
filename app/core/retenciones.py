"""
Automatic withholding (retención en la fuente) calculator.

Given a supplier, the paying company, a base amount and the transaction type,
decide which of the supplier's configured concepts apply and how much is
withheld for each.  Pure functions only: the caller loads every record and
decides what to log or persist.

Rules
-----
1. Arguments are validated before anything else; a bad base amount or
   transaction type raises ``InvalidInputError``.
2. A company that is not a withholding agent withholds nothing → ``[]``.
3. The supplier's goods or services assignment list is walked in order.
   References missing from the catalog, or pointing to an inactive concept,
   are skipped.
4. ``applies = base >= minimum_base``.  Applicable amounts are
   ``base * rate / 100`` rounded half-up to whole pesos; the others are 0
   with ``REASON_BELOW_MINIMUM``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final, Iterable, Sequence

from app.core.entities import (
    AccountingAccount,
    Company,
    RetentionCalculationResult,
    RetentionConcept,
    Supplier,
    TransactionType,
)
from app.core.exceptions import InvalidInputError, UnresolvedConceptReference

REASON_BELOW_MINIMUM: Final[str] = "base amount below minimum threshold"

# Colombian peso: no decimal places in accounting
COP_DECIMALS: Final[int] = 0

_HUNDRED = Decimal(100)

# Integer digits accepted in a base amount; arithmetic runs with enough
# precision that every such base is rounded to the exact whole peso.
MAX_BASE_DIGITS: Final[int] = 100
_WORKING_PRECISION: Final[int] = MAX_BASE_DIGITS + 28


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------


def _to_decimal(base_amount: object) -> Decimal:
    """Coerce *base_amount* to a finite, non-negative ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.

    Raises:
        InvalidInputError: NaN, infinity, negative, bool, non-numeric or
            out-of-range input.
    """
    if isinstance(base_amount, bool) or not isinstance(base_amount, (int, float, Decimal, str)):
        raise InvalidInputError(f"Base de cálculo inválida: {base_amount!r}")

    try:
        value = base_amount if isinstance(base_amount, Decimal) else Decimal(str(base_amount).strip())
    except InvalidOperation as exc:
        raise InvalidInputError(f"Base de cálculo inválida: {base_amount!r}") from exc

    if not value.is_finite():
        raise InvalidInputError(f"Base de cálculo inválida: {base_amount!r}")
    if value < 0:
        raise InvalidInputError(f"La base de cálculo no puede ser negativa: {value}")
    if value and value.adjusted() >= MAX_BASE_DIGITS:
        raise InvalidInputError(
            f"La base de cálculo excede {MAX_BASE_DIGITS} dígitos enteros: {base_amount!r}"
        )
    return value


def parse_transaction_type(transaction_type: object) -> TransactionType:
    """Accept ``TransactionType.GOODS``/``SERVICES`` or their name/value strings.

    ``"GOODS"``, ``"bienes"`` and ``"BIENES"`` all map to GOODS.  ``BOTH`` is a
    supplier profile value, not a transaction, and is rejected.

    Raises:
        InvalidInputError: For BOTH or anything unrecognised.
    """
    parsed: TransactionType | None = None
    if isinstance(transaction_type, TransactionType):
        parsed = transaction_type
    elif isinstance(transaction_type, str):
        key = transaction_type.strip().upper()
        for member in TransactionType:
            if key in (member.name, member.value):
                parsed = member
                break

    if parsed is None or parsed is TransactionType.BOTH:
        raise InvalidInputError(
            f"Tipo de transacción inválido: {transaction_type!r} "
            f"(use {TransactionType.GOODS.value} o {TransactionType.SERVICES.value})"
        )
    return parsed


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


def round_to_minor_unit(amount: Decimal, decimals: int = COP_DECIMALS) -> Decimal:
    """Round half-up to *decimals* places (whole pesos by default).

    >>> round_to_minor_unit(Decimal("25000.025"))
    Decimal('25000')
    >>> round_to_minor_unit(Decimal("0.5"))
    Decimal('1')
    """
    quantum = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + decimals + 2)
        return amount.quantize(quantum, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Catalog resolution
# ---------------------------------------------------------------------------


def _index_catalog(concepts: Iterable[RetentionConcept]) -> dict[str, RetentionConcept]:
    """Map both ``str(id)`` and ``code`` to each active concept."""
    index: dict[str, RetentionConcept] = {}
    for concept in concepts:
        if not concept.active:
            continue
        index.setdefault(concept.code, concept)
        if concept.id is not None:
            index.setdefault(str(concept.id), concept)
    return index


def _assigned_references(
    supplier: Supplier, transaction_type: TransactionType
) -> Sequence[str | int]:
    if transaction_type is TransactionType.GOODS:
        return supplier.assigned_goods_retention_concepts
    return supplier.assigned_services_retention_concepts


def find_unresolved_references(
    supplier: Supplier,
    transaction_type: object,
    concepts: Iterable[RetentionConcept],
) -> list[UnresolvedConceptReference]:
    """List the supplier's references that ``calculate_retentions`` would skip.

    Lets the caller log stale assignments without the calculator doing I/O.
    """
    tx_type = parse_transaction_type(transaction_type)
    index = _index_catalog(concepts)
    return [
        UnresolvedConceptReference(str(ref), tx_type.value)
        for ref in _assigned_references(supplier, tx_type)
        if str(ref) not in index
    ]


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------


def calculate_retentions(
    base_amount: Decimal | int | float | str,
    supplier: Supplier,
    company: Company,
    transaction_type: TransactionType | str,
    concepts: Iterable[RetentionConcept],
    accounts: Iterable[AccountingAccount] | None = None,
) -> list[RetentionCalculationResult]:
    """Compute the withholdings for one payment to *supplier*.

    Args:
        base_amount: Taxable base in pesos, ``>= 0``.
        supplier: Supplier profile with its ordered concept assignments.
        company: Paying company; only a withholding agent withholds.
        transaction_type: GOODS or SERVICES.
        concepts: Full catalog of concepts; inactive entries are ignored.
        accounts: Optional accounting accounts used to annotate each result
            via ``concept.account_code``.

    Returns:
        One ``RetentionCalculationResult`` per resolvable assigned concept,
        in assignment order, applicable or not.  Empty when the company is
        not a withholding agent.

    Raises:
        InvalidInputError: Negative/non-numeric base or bad transaction type.
    """
    base = _to_decimal(base_amount)
    tx_type = parse_transaction_type(transaction_type)

    if not company.is_withholding_agent:
        return []

    index = _index_catalog(concepts)
    accounts_by_code = {account.code: account for account in (accounts or ())}

    results: list[RetentionCalculationResult] = []
    seen: set[str] = set()
    for ref in _assigned_references(supplier, tx_type):
        concept = index.get(str(ref))
        if concept is None or concept.code in seen:
            continue
        seen.add(concept.code)

        applies = base >= concept.minimum_base
        if applies:
            rate = concept.rate if isinstance(concept.rate, Decimal) else Decimal(str(concept.rate))
            with localcontext() as ctx:
                ctx.prec = _WORKING_PRECISION
                withheld = round_to_minor_unit(base * rate / _HUNDRED)
            reason = None
        else:
            withheld = Decimal(0)
            reason = REASON_BELOW_MINIMUM

        results.append(
            RetentionCalculationResult(
                concept=concept,
                calculation_base=base,
                withheld_amount=withheld,
                applies=applies,
                reason=reason,
                account=accounts_by_code.get(concept.account_code or ""),
            )
        )
    return results


def total_withheld(results: Iterable[RetentionCalculationResult]) -> Decimal:
    """Sum of the amounts of the applicable results."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return sum((r.withheld_amount for r in results if r.applies), Decimal(0))


def net_payable(
    base_amount: Decimal | int | float | str,
    results: Iterable[RetentionCalculationResult],
) -> Decimal:
    """Amount left to pay the supplier after withholdings."""
    base = _to_decimal(base_amount)
    withheld = total_withheld(results)
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return base - withheld
