"""
NIT (Número de Identificación Tributaria) check-digit engine.

Implements the DIAN modulo-11 verification digit:

- Non-digit characters are stripped (``"900.123.456"`` == ``"900123456"``).
- Weights are assigned from the rightmost digit outward; a NIT never has
  more than 15 significant digits, so any further digit weighs 0.
- ``remainder = sum % 11``; the digit is ``remainder`` when it is 0 or 1,
  otherwise ``11 - remainder`` (always 1..9).

An empty or all-non-digit input produces ``"0"`` (sum 0 → remainder 0).
"""

from __future__ import annotations

import re
from typing import Final

NIT_WEIGHTS: Final[tuple[int, ...]] = (
    3, 7, 13, 17, 19, 23, 29, 37, 41, 43, 47, 53, 59, 67, 71,
)

_NON_DIGITS = re.compile(r"[^0-9]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def clean_nit(raw_tax_id: str | None) -> str:
    """Return only the digits of *raw_tax_id* (``None`` → ``""``)."""
    if not raw_tax_id:
        return ""
    return _NON_DIGITS.sub("", raw_tax_id)


def compute_check_digit(raw_tax_id: str | None) -> str:
    """Compute the DIAN verification digit for a NIT.

    Args:
        raw_tax_id: NIT number without its check digit; dots, dashes and
            spaces are ignored.

    Returns:
        A single character ``'0'``–``'9'``.

    Example::

        >>> compute_check_digit("800.197.268")
        '4'
    """
    digits = clean_nit(raw_tax_id)

    total = 0
    for position, char in enumerate(reversed(digits)):
        weight = NIT_WEIGHTS[position] if position < len(NIT_WEIGHTS) else 0
        total += int(char) * weight

    remainder = total % 11
    if remainder < 2:
        return str(remainder)
    return str(11 - remainder)


def split_nit(nit: str) -> tuple[str, str | None]:
    """Split ``"900123456-8"`` into ``("900123456", "8")``.

    Input without a dash returns ``(digits, None)``.  Separators inside the
    number part are removed.
    """
    number, sep, check_digit = nit.strip().rpartition("-")
    if not sep:
        return clean_nit(check_digit), None
    return clean_nit(number), (clean_nit(check_digit) or None)


def is_valid_nit(nit: str) -> bool:
    """Return True when *nit* is ``digits-dv`` and the digit matches."""
    number, check_digit = split_nit(nit)
    if not number or check_digit is None or len(check_digit) != 1:
        return False
    return compute_check_digit(number) == check_digit


def format_nit(number: str | None, check_digit: str | None = None) -> str:
    """Group the digits with ``.`` thousands separators and append ``-dv``.

    >>> format_nit("900123456", "8")
    '900.123.456-8'
    """
    digits = clean_nit(number)
    if not digits:
        return ""
    formatted = _THOUSANDS.sub(".", digits)
    if check_digit:
        return f"{formatted}-{check_digit}"
    return formatted
