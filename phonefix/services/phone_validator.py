"""
Brazilian phone number validation.

Rules, first failing rule wins:
- 10 digits (landline) or 11 digits (mobile)
- DDD (area code): first digit 1-9, second 0-9
- Mobile numbers carry 9 as the third digit
- Subscriber number is not one digit repeated (11111111, 999999999)
- Subscriber number is not an obvious test sequence
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 11
MOBILE_INDICATOR = "9"

PHONE_DIGITS_PATTERN = re.compile(r'[0-9]{10,11}')
AREA_CODE_PATTERN = re.compile(r'[1-9][0-9]')

PLACEHOLDER_SUBSCRIBERS = frozenset({"12345678", "123456789"})

PHONE_TYPE_MOBILE = "mobile"
PHONE_TYPE_LANDLINE = "landline"
PHONE_TYPE_INVALID = "invalid"


@dataclass(frozen=True)
class PhoneValidation:
    """Validation verdict for a single digit string."""
    phone: Any
    is_valid: bool
    phone_type: Optional[str] = None
    reasons: Tuple[str, ...] = field(default_factory=tuple)


def _rejection_reason(phone: Any) -> Optional[str]:
    if not phone or not isinstance(phone, str):
        return "empty or non-string phone value"

    if not PHONE_DIGITS_PATTERN.fullmatch(phone):
        length = len(phone)
        if length < PHONE_MIN_LENGTH:
            return f"too short: {length} digits"
        if length > PHONE_MAX_LENGTH:
            return f"too long: {length} digits"
        return "invalid format: non-digit characters"

    area_code = phone[:2]
    if not AREA_CODE_PATTERN.fullmatch(area_code):
        return f"invalid area code: {area_code}"

    if len(phone) == PHONE_MAX_LENGTH and phone[2] != MOBILE_INDICATOR:
        return "mobile numbers must have 9 as the third digit"

    subscriber = phone[2:]
    if len(set(subscriber)) == 1:
        return "repeated digits"

    if subscriber in PLACEHOLDER_SUBSCRIBERS:
        return f"known placeholder value: {subscriber}"

    return None


def validate_phone(phone: Any) -> PhoneValidation:
    """
    Validate a normalized digit string and explain the rejection.

    Examples:
        >>> validate_phone("11998765432").phone_type
        'mobile'
        >>> validate_phone("1111111111").reasons
        ('repeated digits',)
    """
    reason = _rejection_reason(phone)
    if reason is not None:
        return PhoneValidation(phone=phone, is_valid=False, reasons=(reason,))

    phone_type = PHONE_TYPE_MOBILE if len(phone) == PHONE_MAX_LENGTH else PHONE_TYPE_LANDLINE
    return PhoneValidation(phone=phone, is_valid=True, phone_type=phone_type)


def is_valid_brazilian_phone(phone: Any) -> bool:
    return _rejection_reason(phone) is None


def get_phone_type(phone: Any) -> str:
    """Return ``mobile``, ``landline`` or ``invalid``."""
    return validate_phone(phone).phone_type or PHONE_TYPE_INVALID


def format_brazilian_phone(phone: Any) -> Any:
    """Display format: (11) 99876-5432 / (11) 3456-7890. Invalid input is returned as-is."""
    if not is_valid_brazilian_phone(phone):
        return phone

    if len(phone) == PHONE_MAX_LENGTH:
        return f"({phone[:2]}) {phone[2:7]}-{phone[7:]}"
    return f"({phone[:2]}) {phone[2:6]}-{phone[6:]}"
