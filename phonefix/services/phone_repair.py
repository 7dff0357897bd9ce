"""
Phone Digit Repair: Brazilian numbers mangled by spreadsheets

Turns a free-form cell string into the best-effort digit string of a Brazilian
phone number. The repair steps run in a fixed order; every step assumes the
previous ones already ran:

1. Noise strip (emoji/symbol ranges, then every non-digit)
2. Country code strip (``55`` glued to a full local number)
3. Legacy carrier prefix strip (``0XX`` long-distance carrier selection)
4. Leading zero strip (``0`` + DDD + 9 digits)
5. Double area code collapse, 13 digits
6. Double area code collapse, 12 digits

The ``11..99`` range checks only mean "looks like a DDD"; the validator has
the final word.
"""

import re
from functools import reduce
from typing import Any, Callable, Optional, Tuple


# ============================================================================
# NOISE CONSTANTS
# ============================================================================

# Inclusive code point ranges removed before digit extraction
EMOJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F600, 0x1F64F),  # emoticons
    (0x1F300, 0x1F5FF),  # symbols & pictographs
    (0x1F680, 0x1F6FF),  # transport & map symbols
    (0x1F1E0, 0x1F1FF),  # regional indicators (flags)
    (0x2600, 0x26FF),    # miscellaneous symbols
    (0x2700, 0x27BF),    # dingbats
    (0x1F900, 0x1F9FF),  # supplemental symbols & pictographs
    (0x1FA00, 0x1FAFF),  # chess symbols, symbols & pictographs extended-A
    (0xFE00, 0xFE0F),    # variation selectors
    (0x200D, 0x200D),    # zero width joiner
    (0xE0000, 0xE007F),  # tags
    (0x1F000, 0x1F02F),  # mahjong tiles
    (0x1F0A0, 0x1F0FF),  # playing cards
    (0x1F100, 0x1F1FF),  # enclosed alphanumeric supplement
    (0x1F200, 0x1F2FF),  # enclosed ideographic supplement
    (0x1F780, 0x1F7FF),  # geometric shapes extended
    (0x1F800, 0x1F8FF),  # supplemental arrows-C
)

NON_DIGIT_PATTERN = re.compile(r'[^0-9]')
CARRIER_PREFIX_PATTERN = re.compile(r'0[1-9][0-9]')

BRAZIL_COUNTRY_CODE = "55"
MIN_AREA_CODE = 11
MAX_AREA_CODE = 99


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _is_noise(char: str) -> bool:
    code_point = ord(char)
    return any(start <= code_point <= end for start, end in EMOJI_RANGES)


def _looks_like_area_code(chunk: str) -> bool:
    """Two digits between 11 and 99."""
    if len(chunk) != 2 or NON_DIGIT_PATTERN.search(chunk):
        return False
    return MIN_AREA_CODE <= int(chunk) <= MAX_AREA_CODE


def remove_emojis(text: str) -> str:
    """Remove emoji, flags, dingbats and other pictographic noise."""
    if not text:
        return text
    return ''.join(char for char in text if not _is_noise(char))


def strip_non_digits(text: str) -> str:
    """Keep ASCII digits only."""
    return NON_DIGIT_PATTERN.sub('', text)


# ============================================================================
# REPAIR STEPS
# ============================================================================

def strip_country_code(digits: str) -> str:
    """5511998765432 -> 11998765432"""
    if digits.startswith(BRAZIL_COUNTRY_CODE) and len(digits) > 11:
        return digits[len(BRAZIL_COUNTRY_CODE):]
    return digits


def strip_carrier_prefix(digits: str) -> str:
    """04145999081122 -> 45999081122 (carrier 041 in front of DDD 45)."""
    if len(digits) >= 13 and digits.startswith('0'):
        candidate = digits[:3]
        after_carrier = digits[3:5]
        if CARRIER_PREFIX_PATTERN.fullmatch(candidate) and _looks_like_area_code(after_carrier):
            return digits[3:]
    return digits


def strip_leading_zero(digits: str) -> str:
    """045999081122 -> 45999081122"""
    if len(digits) == 12 and digits.startswith('0') and _looks_like_area_code(digits[1:3]):
        return digits[1:]
    return digits


def collapse_double_area_code_13(digits: str) -> str:
    """4145999081122 -> 45999081122 (first DDD duplicated in front)."""
    if len(digits) != 13:
        return digits

    first_ddd, second_ddd, rest = digits[:2], digits[2:4], digits[4:]
    if _looks_like_area_code(first_ddd) and _looks_like_area_code(second_ddd) and len(rest) == 9:
        return second_ddd + rest
    return digits


def collapse_double_area_code_12(digits: str) -> str:
    """414599081122 -> 4599081122"""
    if len(digits) != 12:
        return digits

    first_ddd, rest = digits[:2], digits[2:]
    if _looks_like_area_code(first_ddd) and _looks_like_area_code(rest[:2]) and len(rest) in (10, 11):
        return rest
    return digits


REPAIR_STEPS: Tuple[Callable[[str], str], ...] = (
    strip_country_code,
    strip_carrier_prefix,
    strip_leading_zero,
    collapse_double_area_code_13,
    collapse_double_area_code_12,
)


def repair_digits(digits: str) -> str:
    """Run every structural repair step over an all-digit string."""
    return reduce(lambda current, step: step(current), REPAIR_STEPS, digits)


def clean_phone_format(value: Any) -> Optional[str]:
    """
    Clean a cell string into phone digits.

    Examples:
        >>> clean_phone_format("(11) 99876-5432")
        '11998765432'
        >>> clean_phone_format("+55 11 99876-5432")
        '11998765432'
        >>> clean_phone_format("n/a") is None
        True
    """
    if not value:
        return None

    digits = strip_non_digits(remove_emojis(str(value)))
    digits = repair_digits(digits)
    return digits or None
