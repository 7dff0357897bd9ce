"""
Test suite for Phone Column Detection.

Tests:
1. Column name keywords
2. Scientific notation sampling (E+10 / E+11)
3. 10-11 digit sampling
4. Thresholds, sample size and user-selected columns
"""

import pytest
import pandas as pd

from phonefix.exceptions import SpreadsheetReadError
from phonefix.services.column_detector import (
    PhoneColumnDetector,
    PhoneColumnMatch,
    column_display_name,
    detect_phone_columns,
    parse_column_list,
)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def detector():
    """Create a fresh PhoneColumnDetector instance."""
    return PhoneColumnDetector()


@pytest.fixture
def contacts():
    """Headers and positional data rows of a typical contact export."""
    headers = ["Nome", "Telefone", "Contato", "Email"]
    rows = pd.DataFrame([
        ["Ana", "(11) 99876-5432", "1.1998877665E+10", "ana@example.com"],
        ["Bruno", "45999081122", "4.5999081122E+10", "bruno@example.com"],
        ["Carla", None, "1.134567890E+10", "carla@example.com"],
    ], dtype=object)
    return headers, rows


# ============================================================================
# SCORING
# ============================================================================

class TestNameScoring:
    def test_telefone_keyword(self, detector):
        series = pd.Series(["a", "b"], dtype=object)
        assert detector.score_column("Telefone", series) == 50

    def test_phone_keyword_case_insensitive(self, detector):
        series = pd.Series(["a", "b"], dtype=object)
        assert detector.score_column("Mobile PHONE", series) == 50

    def test_fone_keyword(self, detector):
        series = pd.Series(["a"], dtype=object)
        assert detector.score_column("fone_residencial", series) == 50

    def test_unrelated_name(self, detector):
        series = pd.Series(["a", "b"], dtype=object)
        assert detector.score_column("Nome", series) == 0


class TestValueScoring:
    def test_scientific_notation_majority(self, detector):
        series = pd.Series(["1.1998877665E+10", "4.5999081122E+10", "x"], dtype=object)
        assert detector.score_column("Contato", series) == 40

    def test_eleven_digit_exponent(self, detector):
        series = pd.Series(["1.19988776655E+11", "1.19988776655E+11"], dtype=object)
        assert detector.score_column("Contato", series) == 40

    def test_other_exponents_ignored(self, detector):
        series = pd.Series(["1.5E+3", "2.5E+3"], dtype=object)
        assert detector.score_column("Valor", series) == 0

    def test_phone_length_majority(self, detector):
        series = pd.Series(["11998765432", "(11) 3456-7890", "abc"], dtype=object)
        assert detector.score_column("Contato", series) == 30

    def test_numeric_excel_cells(self, detector):
        series = pd.Series([11998877665.0, 45999081122.0], dtype=object)
        assert detector.score_column("Contato", series) == 30

    def test_name_and_values_add_up(self, detector):
        series = pd.Series(["11998765432", "45999081122"], dtype=object)
        assert detector.score_column("Telefone", series) == 80

    def test_half_is_not_a_majority(self, detector):
        series = pd.Series(["11998765432", "abc"], dtype=object)
        assert detector.score_column("Contato", series) == 0

    def test_blank_and_zero_cells_count_against_the_sample(self, detector):
        series = pd.Series([None, 0, "", "11998765432"], dtype=object)
        assert detector.score_column("Contato", series) == 0

    def test_only_first_rows_sampled(self):
        detector = PhoneColumnDetector(sample_size=2)
        series = pd.Series(["11998765432", "45999081122", "x", "y", "z"], dtype=object)
        assert detector.score_column("Contato", series) == 30

    def test_empty_column(self, detector):
        assert detector.score_column("Contato", pd.Series([], dtype=object)) == 0


# ============================================================================
# DETECTION
# ============================================================================

class TestDetect:
    def test_detects_phone_columns_in_order(self, detector, contacts):
        headers, rows = contacts
        matches = detector.detect(headers, rows)
        assert [m.index for m in matches] == [1, 2]
        assert [m.name for m in matches] == ["Telefone", "Contato"]

    def test_confidence_is_the_score(self, detector, contacts):
        headers, rows = contacts
        matches = detector.detect(headers, rows)
        # Telefone: name +50, 2 of 3 cells with 11 digits +30
        assert matches[0].confidence == 80
        assert matches[1].confidence == 40

    def test_min_score_threshold(self, contacts):
        headers, rows = contacts
        matches = PhoneColumnDetector(min_score=50).detect(headers, rows)
        assert [m.name for m in matches] == ["Telefone"]

    def test_blank_header_named_by_position(self, detector):
        rows = pd.DataFrame([["Ana", "11998765432"], ["Bia", "45999081122"]], dtype=object)
        matches = detector.detect(["Nome", None], rows)
        assert matches == [PhoneColumnMatch(index=1, name="Column 2", confidence=30)]

    def test_no_phone_columns(self, detector):
        rows = pd.DataFrame([["Ana", "ana@example.com"]], dtype=object)
        assert detector.detect(["Nome", "Email"], rows) == []

    def test_module_wrapper(self, contacts):
        headers, rows = contacts
        assert len(detect_phone_columns(headers, rows)) == 2

    def test_match_to_dict(self):
        match = PhoneColumnMatch(index=1, name="Telefone", confidence=80)
        assert match.to_dict() == {"index": 1, "name": "Telefone", "confidence": 80}


class TestFromIndices:
    def test_user_columns(self):
        matches = PhoneColumnDetector.from_indices(["Nome", "Telefone", ""], [1, 2])
        assert matches == [
            PhoneColumnMatch(index=1, name="Telefone", confidence=100),
            PhoneColumnMatch(index=2, name="Column 3", confidence=100),
        ]

    def test_out_of_range(self):
        with pytest.raises(SpreadsheetReadError):
            PhoneColumnDetector.from_indices(["Nome"], [3])

    def test_negative_index(self):
        with pytest.raises(SpreadsheetReadError):
            PhoneColumnDetector.from_indices(["Nome"], [-1])


# ============================================================================
# HELPERS
# ============================================================================

class TestColumnDisplayName:
    def test_header_text(self):
        assert column_display_name(["Nome", "Telefone"], 1) == "Telefone"

    def test_blank_header(self):
        assert column_display_name(["Nome", "  "], 1) == "Column 2"

    def test_numeric_header(self):
        assert column_display_name([2024.0], 0) == "2024"


class TestParseColumnList:
    def test_one_based_to_zero_based(self):
        assert parse_column_list("3,5") == [2, 4]

    def test_whitespace_and_trailing_comma(self):
        assert parse_column_list(" 1 , 2 ,") == [0, 1]

    def test_zero_rejected(self):
        with pytest.raises(ValueError):
            parse_column_list("0")

    def test_text_rejected(self):
        with pytest.raises(ValueError):
            parse_column_list("B")
