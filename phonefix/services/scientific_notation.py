"""
Scientific Notation Handling: Decimal Reconstruction

Spreadsheet software stores long phone numbers as numbers and renders them as
``1.19988776655E+10``. Converting those through ``float`` loses digits once a
number needs more precision than a double can hold, so reconstruction is done
with plain string arithmetic only.

Also provides the cell-text helpers shared by the converter and the column
detector.
"""

import re
from typing import Any, Optional

import numpy as np
import pandas as pd


# ============================================================================
# CONSTANTS
# ============================================================================

SCIENTIFIC_NOTATION_PATTERN = re.compile(r'[0-9.]+E[+-]?[0-9]+')

MANTISSA_PATTERN = re.compile(r'([+-]?)([0-9]*)(?:\.([0-9]*))?')
EXPONENT_PATTERN = re.compile(r'[+-]?[0-9]+')

# Exponents beyond this would only ever pad garbage zeros
MAX_EXPONENT = 4096


# ============================================================================
# CELL TEXT HELPERS
# ============================================================================

def is_blank_cell(value: Any) -> bool:
    """True for None, empty string and NaN-like scalars."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def stringify_cell(value: Any) -> Optional[str]:
    """
    Textual form of a cell value, or None for blank cells.

    Integral floats render without the trailing ``.0`` Python adds, so a
    numeric Excel cell holding 11998877665.0 reads as ``11998877665``.
    """
    if is_blank_cell(value):
        return None

    if isinstance(value, (float, np.floating)) and np.isfinite(value) and float(value).is_integer():
        return str(int(value))

    try:
        return str(value)
    except Exception:
        return None


def _strip_leading_zeros(digits: str) -> str:
    return digits.lstrip('0') or '0'


# ============================================================================
# DETECTION & RECONSTRUCTION
# ============================================================================

def is_scientific_notation(value: Any) -> bool:
    """Detect a value written as ``<mantissa>E<exponent>``."""
    text = stringify_cell(value)
    if text is None:
        return False
    return bool(SCIENTIFIC_NOTATION_PATTERN.search(text.upper()))


def has_oversized_exponent(value: Any) -> bool:
    """True for a well-formed exponent beyond ``MAX_EXPONENT`` (``1E+99999``)."""
    text = stringify_cell(value)
    if text is None:
        return False
    parts = text.upper().strip().split('E')
    if len(parts) != 2 or not EXPONENT_PATTERN.fullmatch(parts[1]):
        return False
    return abs(int(parts[1])) > MAX_EXPONENT


def reconstruct_decimal(value: Any) -> Optional[str]:
    """
    Rebuild the exact digit string behind a scientific notation literal.

    Values without an exponent marker only lose their decimal point and
    leading zeros. Returns None for blank input and for literals that cannot
    be parsed (malformed exponent, non-numeric mantissa).

    Examples:
        >>> reconstruct_decimal("1.1998877665E+10")
        '11998877665'
        >>> reconstruct_decimal("5.5E-3")
        '55'
        >>> reconstruct_decimal("11987654321.00")
        '1198765432100'
    """
    text = stringify_cell(value)
    if text is None:
        return None

    text = text.upper().strip()
    if not text:
        return None

    if 'E' not in text:
        return _strip_leading_zeros(text.replace('.', '', 1))

    parts = text.split('E')
    if len(parts) != 2:
        return None
    mantissa, exponent_text = parts

    if not EXPONENT_PATTERN.fullmatch(exponent_text):
        return None
    exponent = int(exponent_text)
    if abs(exponent) > MAX_EXPONENT:
        return None

    match = MANTISSA_PATTERN.fullmatch(mantissa)
    if not match:
        return None
    sign, int_part, frac_part = match.group(1), match.group(2), match.group(3) or ''
    if not int_part and not frac_part:
        return None

    digits = int_part + frac_part

    if exponent >= 0:
        # Decimal point moves right; pad only what the fraction cannot cover
        digits = digits + '0' * max(0, exponent - len(frac_part))
    else:
        digits = '0' * max(0, -exponent - len(int_part)) + digits

    result = _strip_leading_zeros(digits)
    return f"-{result}" if sign == '-' else result
