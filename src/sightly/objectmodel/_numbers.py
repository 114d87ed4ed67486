"""Lenient numeric grammar.

Template values arrive as text far more often than as numbers, so numeric
coercion accepts the usual literal spellings: decimal integers, hexadecimal
(``0x1F``, ``#1F``), leading-zero octal (``017``), type suffixes (``10L``,
``1.5f``, ``2d``) and fractional or exponent forms (``1.``, ``.5``,
``1e5``). Surrounding whitespace is not accepted.
"""

import math
import re
from decimal import Decimal

_HEX_PATTERN = re.compile(r"(?P<sign>[+-]?)(?:0[xX]|#)(?P<digits>[0-9a-fA-F]+)")
_INTEGER_PATTERN = re.compile(r"(?P<sign>[+-]?)(?P<digits>\d+)[lL]?")
_DECIMAL_PATTERN = re.compile(
    r"(?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)[fFdD]?"
)
_OCTAL_DIGITS = frozenset("01234567")


def create_number(text: str) -> int | float | Decimal | None:
    """Parse text as a number using the lenient grammar.

    Args:
        text: The text to parse.

    Returns:
        An int for integral forms, a float for fractional or exponent forms
        (a Decimal when the value does not fit a float), or None when the
        text is not a number.
    """
    if not text:
        return None

    if match := _HEX_PATTERN.fullmatch(text):
        value = int(match.group("digits"), 16)
        return -value if match.group("sign") == "-" else value

    if match := _INTEGER_PATTERN.fullmatch(text):
        digits = match.group("digits")
        if len(digits) > 1 and digits.startswith("0"):
            # Leading zero means octal; 08 and 09 are invalid
            if not _OCTAL_DIGITS.issuperset(digits):
                return None
            value = int(digits, 8)
        else:
            value = int(digits)
        return -value if match.group("sign") == "-" else value

    if match := _DECIMAL_PATTERN.fullmatch(text):
        number = match.group("number")
        result = float(number)
        if math.isinf(result):
            return Decimal(number)
        return result

    return None


def is_creatable(text: str) -> bool:
    """Return True if text is a valid number in the lenient grammar."""
    return create_number(text) is not None
