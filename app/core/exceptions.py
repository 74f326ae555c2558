"""Domain errors raised by the retention and NIT core."""


class RetentionError(Exception):
    """Base class for every error raised by ``app.core``."""


class InvalidInputError(RetentionError, ValueError):
    """Caller contract violation: negative or non-numeric base amount, or an
    unrecognised transaction type.  Never retried; the core does no partial work."""


class UnresolvedConceptReference(RetentionError):
    """A supplier references a concept missing (or inactive) in the catalog.

    The calculator never raises this; it is carried by
    ``find_unresolved_references`` so the service layer can log it.
    """

    def __init__(self, reference: str, transaction_type: str) -> None:
        self.reference = reference
        self.transaction_type = transaction_type
        super().__init__(
            f"Concepto de retención '{reference}' ({transaction_type}) "
            "no existe o está inactivo"
        )
