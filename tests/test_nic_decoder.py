"""Tests for the NIC validator and decoder.

Tests cover:
- Format classification (old/new) and specific error codes
- Day-of-year range checks (male and female ranges)
- Birth date decoding, including the Feb 29 ordinal in non-leap years
- Gender detection via the +500 offset
- Fixed 1900s century for the old format
- parse() fail-fast behaviour and decode contract violations
- Keystroke sanitization
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from nic_engine.decoders.nic import (
    NicDecodeError,
    NicValidationError,
    decode,
    parse,
    sanitize_nic_input,
    validate,
)
from nic_engine.models.enums import Gender, NicDecodeErrorCode, NicErrorCode, NicFormat

REF = date(2026, 2, 28)


class TestValidateFormat:
    """Test format classification."""

    def test_old_format(self) -> None:
        result = validate("941234567V")
        assert result.valid is True
        assert result.format == NicFormat.OLD
        assert result.error_code is None

    def test_new_format(self) -> None:
        result = validate("199412345678")
        assert result.valid is True
        assert result.format == NicFormat.NEW

    def test_invalid_word(self) -> None:
        result = validate("invalid")
        assert result.valid is False
        assert result.format is None
        assert result.error_code == NicErrorCode.INVALID_FORMAT

    @pytest.mark.parametrize("suffix", ["V", "v", "X", "x"])
    def test_all_check_characters(self, suffix: str) -> None:
        assert validate(f"941234567{suffix}").format == NicFormat.OLD

    def test_whitespace_trimmed(self) -> None:
        assert validate("  941234567V  ").valid is True

    def test_empty_string(self) -> None:
        assert validate("").error_code == NicErrorCode.REQUIRED

    def test_blank_string(self) -> None:
        assert validate("   ").error_code == NicErrorCode.REQUIRED

    def test_old_length_with_letter_in_digits(self) -> None:
        """10 characters ending in V but not 9 digits → old-format hint."""
        assert validate("94123456AV").error_code == NicErrorCode.INVALID_OLD_FORMAT

    def test_twelve_chars_not_all_digits(self) -> None:
        assert validate("19941234567A").error_code == NicErrorCode.INVALID_NEW_FORMAT

    def test_wrong_check_character(self) -> None:
        assert validate("941234567Z").error_code == NicErrorCode.INVALID_FORMAT

    def test_too_short(self) -> None:
        assert validate("941234567").error_code == NicErrorCode.INVALID_FORMAT

    def test_too_long(self) -> None:
        assert validate("1994123456789").error_code == NicErrorCode.INVALID_FORMAT


class TestValidateDayOfYear:
    """Test the permissive day-of-year range check."""

    @pytest.mark.parametrize("day", ["001", "366", "501", "866"])
    def test_boundaries_accepted(self, day: str) -> None:
        assert validate(f"94{day}4567V").valid is True
        assert validate(f"1994{day}45678").valid is True

    @pytest.mark.parametrize("day", ["000", "367", "500", "867", "999"])
    def test_out_of_range_rejected(self, day: str) -> None:
        assert validate(f"94{day}4567V").error_code == NicErrorCode.INVALID_DAY_OF_YEAR
        assert validate(f"1994{day}45678").error_code == NicErrorCode.INVALID_DAY_OF_YEAR

    def test_366_accepted_regardless_of_year(self) -> None:
        """1994 is not a leap year, but the validator has no year context."""
        assert validate("943664567V").valid is True


class TestDecode:
    """Test field extraction and calendar conversion."""

    def test_decode_male_old(self) -> None:
        info = decode("941234567V", NicFormat.OLD, REF)
        assert info.birth_date == date(1994, 5, 3)
        assert info.gender == Gender.MALE
        assert info.birth_year == 1994
        assert info.normalized_day_of_year == 123
        assert info.format == NicFormat.OLD

    def test_decode_female_same_date(self) -> None:
        male = decode("941344567V", NicFormat.OLD, REF)
        female = decode("946344567V", NicFormat.OLD, REF)
        assert male.gender == Gender.MALE
        assert female.gender == Gender.FEMALE
        assert male.birth_date == female.birth_date == date(1994, 5, 14)
        assert female.normalized_day_of_year == 134

    def test_old_format_century_fixed(self) -> None:
        """Year 05 is 1905, never 2005."""
        info = decode("051234567V", NicFormat.OLD, REF)
        assert info.birth_year == 1905
        assert info.birth_date == date(1905, 5, 3)

    def test_new_format_full_year(self) -> None:
        info = decode("200000112345", NicFormat.NEW, REF)
        assert info.birth_date == date(2000, 1, 1)

    def test_nic_normalised(self) -> None:
        info = decode(" 941234567v ", NicFormat.OLD, REF)
        assert info.nic == "941234567V"

    def test_age_attached(self) -> None:
        info = decode("941234567V", NicFormat.OLD, REF)
        assert (info.age.years, info.age.months, info.age.days) == (31, 9, 25)

    def test_age_defaults_to_today(self) -> None:
        with patch("nic_engine.decoders.nic.today", return_value=date(1994, 5, 3)):
            info = decode("941234567V", NicFormat.OLD)
        assert (info.age.years, info.age.months, info.age.days) == (0, 0, 0)


class TestLeapYearOrdinals:
    """Ordinal 60 is Feb 29 in leap years and Mar 1 otherwise."""

    def test_leap_day_60(self) -> None:
        assert decode("200006012345", NicFormat.NEW, REF).birth_date == date(2000, 2, 29)

    def test_leap_day_60_female(self) -> None:
        info = decode("200056012345", NicFormat.NEW, REF)
        assert info.gender == Gender.FEMALE
        assert info.birth_date == date(2000, 2, 29)

    def test_leap_day_61(self) -> None:
        assert decode("200006112345", NicFormat.NEW, REF).birth_date == date(2000, 3, 1)

    def test_non_leap_day_59(self) -> None:
        assert decode("200105912345", NicFormat.NEW, REF).birth_date == date(2001, 2, 28)

    def test_non_leap_day_60(self) -> None:
        assert decode("200106012345", NicFormat.NEW, REF).birth_date == date(2001, 3, 1)

    def test_non_leap_day_61(self) -> None:
        assert decode("200106112345", NicFormat.NEW, REF).birth_date == date(2001, 3, 2)

    def test_non_leap_last_day(self) -> None:
        assert decode("200136512345", NicFormat.NEW, REF).birth_date == date(2001, 12, 31)

    def test_leap_last_day(self) -> None:
        assert decode("200036612345", NicFormat.NEW, REF).birth_date == date(2000, 12, 31)

    def test_old_format_leap_year(self) -> None:
        assert decode("960604567V", NicFormat.OLD, REF).birth_date == date(1996, 2, 29)

    def test_century_year_not_leap(self) -> None:
        """1900 is divisible by 100 but not 400."""
        assert decode("000604567V", NicFormat.OLD, REF).birth_date == date(1900, 3, 1)


class TestDecodeErrors:
    """Decode re-checks bounds with the birth year."""

    def test_day_366_in_non_leap_year(self) -> None:
        with pytest.raises(NicDecodeError) as exc_info:
            decode("200136612345", NicFormat.NEW, REF)
        assert exc_info.value.code == NicDecodeErrorCode.UNKNOWN_GENDER

    def test_female_866_in_non_leap_year(self) -> None:
        with pytest.raises(NicDecodeError) as exc_info:
            decode("200186612345", NicFormat.NEW, REF)
        assert exc_info.value.code == NicDecodeErrorCode.UNKNOWN_GENDER

    def test_day_zero(self) -> None:
        with pytest.raises(NicDecodeError) as exc_info:
            decode("940004567V", NicFormat.OLD, REF)
        assert exc_info.value.code == NicDecodeErrorCode.UNKNOWN_GENDER

    def test_year_zero_not_representable(self) -> None:
        with pytest.raises(NicDecodeError) as exc_info:
            decode("000012312345", NicFormat.NEW, REF)
        assert exc_info.value.code == NicDecodeErrorCode.INVALID_DATE


class TestParse:
    """Test validate → decode → age pipeline."""

    def test_parse_valid(self) -> None:
        info = parse("941234567V", reference_date=REF)
        assert info.birth_date == date(1994, 5, 3)
        assert info.gender == Gender.MALE

    def test_parse_new_format(self) -> None:
        info = parse("199412345678", reference_date=REF)
        assert info.format == NicFormat.NEW
        assert info.birth_date == date(1994, 5, 3)

    def test_parse_invalid_raises(self) -> None:
        with pytest.raises(NicValidationError) as exc_info:
            parse("invalid")
        assert exc_info.value.code == NicErrorCode.INVALID_FORMAT
        assert str(exc_info.value) == "Invalid NIC: invalid_format"

    def test_parse_empty_raises_required(self) -> None:
        with pytest.raises(NicValidationError) as exc_info:
            parse("  ")
        assert exc_info.value.code == NicErrorCode.REQUIRED

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("941234567")

    def test_parse_propagates_decode_error(self) -> None:
        """Valid-looking but impossible for 1994 → hard failure, no default."""
        with pytest.raises(NicDecodeError):
            parse("943664567V", reference_date=REF)

    def test_birth_date_as_reference_gives_zero_age(self) -> None:
        for nic in ("941234567V", "946344567V", "200006012345", "200136512345"):
            birth = parse(nic, reference_date=REF).birth_date
            info = parse(nic, reference_date=birth)
            assert (info.age.years, info.age.months, info.age.days) == (0, 0, 0)


class TestSanitize:
    """Test the keystroke filter."""

    def test_strips_separators(self) -> None:
        assert sanitize_nic_input("94-123 4567v") == "941234567V"

    def test_truncates_to_twelve(self) -> None:
        assert sanitize_nic_input("1994123456789999") == "199412345678"

    def test_drops_letters_other_than_v_and_x(self) -> None:
        assert sanitize_nic_input("nic: 94abc") == "94"

    def test_empty(self) -> None:
        assert sanitize_nic_input("") == ""
