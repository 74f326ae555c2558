"""Pure domain core: NIT check digit and withholding calculator (no I/O)."""

from app.core.entities import (  # noqa: F401
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
from app.core.exceptions import (  # noqa: F401
    InvalidInputError,
    RetentionError,
    UnresolvedConceptReference,
)
from app.core.nit import compute_check_digit, format_nit, is_valid_nit  # noqa: F401
from app.core.retenciones import (  # noqa: F401
    REASON_BELOW_MINIMUM,
    calculate_retentions,
    net_payable,
    total_withheld,
)
