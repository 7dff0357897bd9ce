"""
Phone cell conversion: reconstruction, repair and validation in one call.

Handles the shapes phone numbers take after a trip through a spreadsheet:
- scientific notation (1.19988776655E+10)
- numbers with a decimal tail (11987654321.00)
- formatted strings ("(11) 99876-5432")
- plain strings ("11987654321")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from phonefix.services.phone_repair import clean_phone_format
from phonefix.services.phone_validator import validate_phone
from phonefix.services.scientific_notation import (
    has_oversized_exponent,
    is_scientific_notation,
    reconstruct_decimal,
    stringify_cell,
)

UNCONVERTIBLE_REASON = "could not convert value"


@dataclass(frozen=True)
class PhoneVerdict:
    """Outcome of converting one raw cell."""
    original: Any
    normalized: Optional[str]
    is_valid: bool
    reasons: Tuple[str, ...] = field(default_factory=tuple)
    phone_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": stringify_cell(self.original),
            "normalized": self.normalized,
            "is_valid": self.is_valid,
            "phone_type": self.phone_type,
            "reasons": list(self.reasons),
        }


def _drop_decimal_tail(text: str) -> str:
    """11987654321.00 -> 11987654321"""
    return text.split('.', 1)[0] if '.' in text else text


def convert_to_phone(value: Any) -> Optional[str]:
    """Convert a raw cell value into phone digits, or None when nothing is left."""
    text = stringify_cell(value)
    if text is None:
        return None

    processed = None
    if is_scientific_notation(text):
        # exponent digits must not leak into the phone
        if has_oversized_exponent(text):
            return None
        processed = reconstruct_decimal(text)

    if processed is None:
        processed = _drop_decimal_tail(text)

    return clean_phone_format(processed)


def convert_and_validate(value: Any) -> PhoneVerdict:
    """Convert a raw cell and attach the validation verdict."""
    converted = convert_to_phone(value)
    if not converted:
        return PhoneVerdict(
            original=value,
            normalized=None,
            is_valid=False,
            reasons=(UNCONVERTIBLE_REASON,),
        )

    validation = validate_phone(converted)
    return PhoneVerdict(
        original=value,
        normalized=converted,
        is_valid=validation.is_valid,
        reasons=validation.reasons,
        phone_type=validation.phone_type,
    )
