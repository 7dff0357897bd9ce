"""
Tests for Brazilian phone validation

Rule priority: length/format -> area code -> mobile 9 -> repeated digits -> placeholder.
"""

from phonefix.services.phone_validator import (
    PHONE_TYPE_INVALID,
    PHONE_TYPE_LANDLINE,
    PHONE_TYPE_MOBILE,
    format_brazilian_phone,
    get_phone_type,
    is_valid_brazilian_phone,
    validate_phone,
)


class TestValidatePhoneAccepts:
    def test_mobile(self):
        result = validate_phone("11998765432")
        assert result.is_valid is True
        assert result.phone_type == PHONE_TYPE_MOBILE
        assert result.reasons == ()

    def test_landline(self):
        result = validate_phone("1134567890")
        assert result.is_valid is True
        assert result.phone_type == PHONE_TYPE_LANDLINE

    def test_highest_area_code(self):
        assert validate_phone("99998765432").is_valid is True


class TestValidatePhoneRejects:
    def test_too_short(self):
        result = validate_phone("119876543")
        assert result.is_valid is False
        assert result.reasons == ("too short: 9 digits",)

    def test_too_long(self):
        assert validate_phone("119987654321").reasons == ("too long: 12 digits",)

    def test_non_digit_characters(self):
        assert validate_phone("11a98765432").reasons == ("invalid format: non-digit characters",)

    def test_trailing_newline_is_not_a_digit(self):
        assert validate_phone("1134567890\n").is_valid is False

    def test_invalid_area_code(self):
        assert validate_phone("0198765432").reasons == ("invalid area code: 01",)

    def test_mobile_without_nine(self):
        result = validate_phone("11898765432")
        assert result.reasons == ("mobile numbers must have 9 as the third digit",)

    def test_repeated_landline(self):
        assert validate_phone("1111111111").reasons == ("repeated digits",)

    def test_repeated_mobile(self):
        assert validate_phone("11999999999").reasons == ("repeated digits",)

    def test_placeholder_sequence(self):
        assert validate_phone("1112345678").reasons == ("known placeholder value: 12345678",)

    def test_empty(self):
        assert validate_phone("").reasons == ("empty or non-string phone value",)
        assert validate_phone(None).reasons == ("empty or non-string phone value",)

    def test_non_string(self):
        assert validate_phone(11998765432).is_valid is False

    def test_first_failing_rule_wins(self):
        # bad area code and repeated digits: area code is checked first
        assert validate_phone("0111111111").reasons == ("invalid area code: 01",)

    def test_rejection_has_no_type(self):
        assert validate_phone("1111111111").phone_type is None


class TestIsValidBrazilianPhone:
    def test_valid(self):
        assert is_valid_brazilian_phone("45999081122") is True

    def test_invalid(self):
        assert is_valid_brazilian_phone("45899081122") is False


class TestGetPhoneType:
    def test_mobile(self):
        assert get_phone_type("11998765432") == PHONE_TYPE_MOBILE

    def test_landline(self):
        assert get_phone_type("1134567890") == PHONE_TYPE_LANDLINE

    def test_invalid(self):
        assert get_phone_type("123") == PHONE_TYPE_INVALID


class TestFormatBrazilianPhone:
    def test_mobile(self):
        assert format_brazilian_phone("11998765432") == "(11) 99876-5432"

    def test_landline(self):
        assert format_brazilian_phone("1134567890") == "(11) 3456-7890"

    def test_invalid_returned_unchanged(self):
        assert format_brazilian_phone("123") == "123"
