"""
Typed domain records consumed and produced by the retention calculator.

These are plain frozen dataclasses with no ORM dependency.  The service layer
builds them from SQLAlchemy rows (see ``retencion_service``) so that the
calculator can be exercised in isolation by tests or other callers.

Enum *values* are the Spanish codes persisted in the database; the member
*names* are the English terms used by the calculator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    GOODS = "BIENES"
    SERVICES = "SERVICIOS"
    BOTH = "AMBOS"


class VatResponsibility(str, Enum):
    RESPONSIBLE = "RESPONSABLE"
    NOT_RESPONSIBLE = "NO_RESPONSABLE"


class PersonType(str, Enum):
    NATURAL = "NATURAL"
    LEGAL = "JURIDICA"


class AccountType(str, Enum):
    ASSET = "ACTIVO"
    LIABILITY = "PASIVO"
    EQUITY = "PATRIMONIO"
    INCOME = "INGRESO"
    EXPENSE = "GASTO"
    COST = "COSTO"


@dataclass(frozen=True)
class RetentionConcept:
    """A withholding rule: rate (percentage 0-100) over a minimum taxable base.

    ``id`` is optional so catalogs can be keyed by ``code`` alone.
    """

    code: str
    name: str
    minimum_base: Decimal
    rate: Decimal
    account_code: str | None = None
    active: bool = True
    id: int | None = None


@dataclass(frozen=True)
class TaxRegime:
    code: str
    name: str
    is_filer_of_income_tax: bool = False
    applies_vat: bool = False
    active: bool = True


@dataclass(frozen=True)
class AccountingAccount:
    code: str
    name: str
    type: AccountType
    level: int = 1
    parent: str | None = None
    active: bool = True


@dataclass(frozen=True)
class Supplier:
    """Supplier profile as seen by the calculator.

    The two assignment tuples hold concept references (id or code) in the
    order they were configured; that order is the order of the results.
    """

    id: int
    tax_id: str
    name: str
    tax_regime: TaxRegime | None = None
    vat_responsibility: VatResponsibility = VatResponsibility.RESPONSIBLE
    is_self_withholder: bool = False
    is_income_tax_filer: bool = True
    person_type: PersonType = PersonType.LEGAL
    primary_transaction_type: TransactionType = TransactionType.BOTH
    assigned_goods_retention_concepts: tuple[str | int, ...] = field(default_factory=tuple)
    assigned_services_retention_concepts: tuple[str | int, ...] = field(default_factory=tuple)
    registered_for_local_turnover_tax: bool = False
    active: bool = True
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    contact_name: str | None = None


@dataclass(frozen=True)
class Company:
    id: int
    tax_id: str
    name: str
    is_withholding_agent: bool
    tax_regime: TaxRegime | None = None
    municipality: str | None = None
    active: bool = True


@dataclass(frozen=True)
class RetentionCalculationResult:
    """Outcome for one concept.  Built fresh per call and never persisted here."""

    concept: RetentionConcept
    calculation_base: Decimal
    withheld_amount: Decimal
    applies: bool
    reason: str | None = None
    account: AccountingAccount | None = None
