"""
Phone Column Detection

Decides which spreadsheet columns hold phone numbers, scoring each column on:
1. Column name keywords (tel / fone / phone)
2. Scientific notation with a phone-sized exponent (E+10 / E+11)
3. Values with 10-11 digits

A column scoring at least ``min_score`` is treated as a phone column.
"""

import re
from typing import Any, Dict, List, Sequence
from dataclasses import dataclass, asdict

import pandas as pd

from phonefix.exceptions import SpreadsheetReadError
from phonefix.services.scientific_notation import is_blank_cell, is_scientific_notation, stringify_cell


@dataclass
class PhoneColumnMatch:
    """A column selected for phone conversion."""
    index: int
    name: str
    confidence: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def column_display_name(headers: Sequence[Any], index: int) -> str:
    """Header text, or ``Column N`` (1-based) when the header cell is blank."""
    header = headers[index] if index < len(headers) else None
    text = stringify_cell(header)
    return text if text and text.strip() else f"Column {index + 1}"


class PhoneColumnDetector:
    """
    Scores DataFrame columns for phone content.

    Scoring:
    - name keyword        +50
    - E+10/E+11 majority  +40
    - 10-11 digit majority +30
    """

    NAME_KEYWORDS = ("tel", "fone", "phone")
    PHONE_EXPONENTS = ("E+10", "E+11")

    NAME_SCORE = 50
    SCIENTIFIC_SCORE = 40
    DIGIT_PATTERN_SCORE = 30

    def __init__(self, sample_size: int = 100, min_score: int = 30):
        self.sample_size = sample_size
        self.min_score = min_score

    def _score_column_name(self, name: Any) -> int:
        name_lower = str(name if not is_blank_cell(name) else "").lower()
        if any(keyword in name_lower for keyword in self.NAME_KEYWORDS):
            return self.NAME_SCORE
        return 0

    @staticmethod
    def _is_empty_sample(value: Any) -> bool:
        # Blanks, zero and False are not sampled
        if is_blank_cell(value):
            return True
        return bool(pd.api.types.is_number(value) and value == 0)

    def _is_phone_exponent(self, value: Any) -> bool:
        if not is_scientific_notation(value):
            return False
        text = (stringify_cell(value) or "").upper()
        return any(exponent in text for exponent in self.PHONE_EXPONENTS)

    @staticmethod
    def _has_phone_length(value: Any) -> bool:
        text = stringify_cell(value) or ""
        digits = re.sub(r'[^0-9]', '', text)
        return len(digits) in (10, 11)

    def score_column(self, name: Any, series: pd.Series) -> int:
        """Phone score of a single column."""
        score = self._score_column_name(name)

        sample_size = min(self.sample_size, len(series))
        scientific_count = 0
        phone_pattern_count = 0

        for value in series.iloc[:sample_size]:
            if self._is_empty_sample(value):
                continue
            if self._is_phone_exponent(value):
                scientific_count += 1
            if self._has_phone_length(value):
                phone_pattern_count += 1

        if scientific_count > sample_size * 0.5:
            score += self.SCIENTIFIC_SCORE
        if phone_pattern_count > sample_size * 0.5:
            score += self.DIGIT_PATTERN_SCORE

        return score

    def detect(self, headers: Sequence[Any], rows: pd.DataFrame) -> List[PhoneColumnMatch]:
        """
        Detect phone columns.

        Args:
            headers: Header row, one entry per column
            rows: Data rows, positional columns aligned with ``headers``

        Returns:
            Matches in column order
        """
        matches: List[PhoneColumnMatch] = []
        for index in range(len(headers)):
            series = rows.iloc[:, index] if index < rows.shape[1] else pd.Series([], dtype=object)
            score = self.score_column(headers[index], series)
            if score >= self.min_score:
                matches.append(PhoneColumnMatch(
                    index=index,
                    name=column_display_name(headers, index),
                    confidence=score,
                ))
        return matches

    @staticmethod
    def from_indices(headers: Sequence[Any], indices: Sequence[int]) -> List[PhoneColumnMatch]:
        """Build matches for user-selected (0-based) columns."""
        matches = []
        for index in indices:
            if index < 0 or index >= len(headers):
                raise SpreadsheetReadError(
                    f"Column {index + 1} does not exist (sheet has {len(headers)} columns)"
                )
            matches.append(PhoneColumnMatch(
                index=index,
                name=column_display_name(headers, index),
                confidence=100,
            ))
        return matches


def detect_phone_columns(
    headers: Sequence[Any],
    rows: pd.DataFrame,
    sample_size: int = 100,
    min_score: int = 30,
) -> List[PhoneColumnMatch]:
    """Convenience wrapper around :class:`PhoneColumnDetector`."""
    return PhoneColumnDetector(sample_size=sample_size, min_score=min_score).detect(headers, rows)


def parse_column_list(text: str) -> List[int]:
    """
    Parse a user column list such as ``"3,5"`` (1-based) into 0-based indices.

    Raises:
        ValueError: On anything that is not a positive column number
    """
    indices = []
    for part in str(text).split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or int(part) < 1:
            raise ValueError(f"Invalid column number: {part!r}")
        indices.append(int(part) - 1)
    return indices
