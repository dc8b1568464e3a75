"""Sri Lankan National Identity Card (NIC) validator and decoder.

Pure Python — no I/O, no state. Extracts birth date, gender and age from
either NIC layout.

OLD format: YYDDDNNNNC
  - YY:   year of birth (last 2 digits, always 19YY)
  - DDD:  day of year (1–366 male, 501–866 female)
  - NNNN: serial number
  - C:    check character (V or X)

NEW format: YYYYDDDNNNNN
  - YYYY:  year of birth
  - DDD:   day of year (1–366 male, 501–866 female)
  - NNNNN: serial number

Day-of-year ordinals are counted on a leap-year calendar: in a non-leap year
there is no Feb 29, so ordinals from 60 onward sit one slot later in the
leap cumulative table.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import date

from nic_engine.calculators.age import age_at, today
from nic_engine.models.enums import Gender, NicDecodeErrorCode, NicErrorCode, NicFormat
from nic_engine.schemas.nic import DecodedInfo, ValidationResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_OLD_NIC_PATTERN = re.compile(r"^[0-9]{9}[VvXx]$")
_NEW_NIC_PATTERN = re.compile(r"^[0-9]{12}$")
_INPUT_FILTER = re.compile(r"[^0-9VX]")

FEMALE_OFFSET = 500
MAX_DAY_OF_YEAR = 366
MAX_NIC_LENGTH = 12

# (offset, length) of each field per layout
_YEAR_FIELD: dict[NicFormat, tuple[int, int]] = {
    NicFormat.OLD: (0, 2),
    NicFormat.NEW: (0, 4),
}
_DAY_FIELD: dict[NicFormat, tuple[int, int]] = {
    NicFormat.OLD: (2, 3),
    NicFormat.NEW: (4, 3),
}

# Days elapsed before each month on a leap-year calendar; index 12 = year length.
CUMULATIVE_DAYS_LEAP: tuple[int, ...] = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335, 366)
_FEB_29_ORDINAL = 60


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class NicValidationError(ValueError):
    """Raised by parse() when the input is not a well-formed NIC."""

    def __init__(self, code: NicErrorCode) -> None:
        super().__init__(f"Invalid NIC: {code.value}")
        self.code = code


class NicDecodeError(Exception):
    """Raised when a structurally valid NIC does not map to a real birth date."""

    def __init__(self, code: NicDecodeErrorCode, detail: str) -> None:
        super().__init__(f"{code.value}: {detail}")
        self.code = code


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _field(nic: str, span: tuple[int, int]) -> int:
    start, length = span
    return int(nic[start:start + length])


def _is_valid_day_of_year(raw_day: int) -> bool:
    """Year-agnostic range check: 1–366 or 501–866."""
    base = raw_day - FEMALE_OFFSET if raw_day > FEMALE_OFFSET else raw_day
    return 1 <= base <= MAX_DAY_OF_YEAR


def _month_and_day(day_of_year: int, year: int) -> tuple[int, int]:
    """Map a NIC day-of-year ordinal to (month, day)."""
    adjusted = day_of_year
    if not calendar.isleap(year) and day_of_year >= _FEB_29_ORDINAL:
        adjusted += 1

    for month in range(1, 13):
        if adjusted <= CUMULATIVE_DAYS_LEAP[month]:
            return month, adjusted - CUMULATIVE_DAYS_LEAP[month - 1]

    msg = f"Day of year {day_of_year} beyond year end"
    raise NicDecodeError(NicDecodeErrorCode.INVALID_DATE, msg)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sanitize_nic_input(value: str) -> str:
    """Apply the form keystroke filter: upper-case, keep [0-9VX], max 12 chars."""
    return _INPUT_FILTER.sub("", value.upper())[:MAX_NIC_LENGTH]


def validate(raw: str) -> ValidationResult:
    """Classify a raw string as an OLD or NEW NIC, or explain why it is neither.

    The day-of-year check is permissive (366/866 upper bound regardless of
    year); decode() applies the exact year-aware bound.

    Examples:
        validate("941234567V")   -> valid, OLD
        validate("199412345678") -> valid, NEW
        validate("invalid")      -> INVALID_FORMAT
    """
    nic = raw.strip()

    if not nic:
        return ValidationResult(valid=False, error_code=NicErrorCode.REQUIRED)

    for nic_format, pattern in ((NicFormat.OLD, _OLD_NIC_PATTERN), (NicFormat.NEW, _NEW_NIC_PATTERN)):
        if pattern.match(nic):
            if not _is_valid_day_of_year(_field(nic, _DAY_FIELD[nic_format])):
                return ValidationResult(valid=False, error_code=NicErrorCode.INVALID_DAY_OF_YEAR)
            return ValidationResult(valid=True, format=nic_format)

    # Most specific hint first
    if len(nic) == 10 and nic[-1] in "VvXx":
        return ValidationResult(valid=False, error_code=NicErrorCode.INVALID_OLD_FORMAT)
    if len(nic) == MAX_NIC_LENGTH:
        return ValidationResult(valid=False, error_code=NicErrorCode.INVALID_NEW_FORMAT)
    return ValidationResult(valid=False, error_code=NicErrorCode.INVALID_FORMAT)


def decode(raw: str, nic_format: NicFormat, reference_date: date | None = None) -> DecodedInfo:
    """Decode a structurally valid NIC into birth date, gender and age.

    Re-derives every field with year-aware bounds instead of trusting
    validate().

    Args:
        raw: NIC string already accepted by validate().
        nic_format: The layout validate() reported.
        reference_date: "Now" for the age; defaults to today().

    Returns:
        DecodedInfo for the holder.

    Raises:
        NicDecodeError: UNKNOWN_GENDER if the day field fits neither range for
            the birth year, INVALID_DATE if it does not map to a calendar day.
    """
    nic = raw.strip().upper()

    year_part = _field(nic, _YEAR_FIELD[nic_format])
    birth_year = 1900 + year_part if nic_format == NicFormat.OLD else year_part

    raw_day = _field(nic, _DAY_FIELD[nic_format])
    max_male_day = 366 if calendar.isleap(birth_year) else 365

    if 1 <= raw_day <= max_male_day:
        gender = Gender.MALE
    elif FEMALE_OFFSET + 1 <= raw_day <= FEMALE_OFFSET + max_male_day:
        gender = Gender.FEMALE
    else:
        msg = f"Day field {raw_day} outside male/female ranges for {birth_year}"
        raise NicDecodeError(NicDecodeErrorCode.UNKNOWN_GENDER, msg)

    day_of_year = raw_day - FEMALE_OFFSET if raw_day > FEMALE_OFFSET else raw_day
    if not 1 <= day_of_year <= max_male_day:
        msg = f"Day of year {day_of_year} outside 1–{max_male_day} for {birth_year}"
        raise NicDecodeError(NicDecodeErrorCode.INVALID_DATE, msg)

    month, day = _month_and_day(day_of_year, birth_year)
    try:
        birth_date = date(birth_year, month, day)
    except ValueError as exc:
        # Year 0000 in the NEW layout is not representable
        raise NicDecodeError(NicDecodeErrorCode.INVALID_DATE, str(exc)) from exc

    return DecodedInfo(
        nic=nic,
        birth_date=birth_date,
        gender=gender,
        age=age_at(birth_date, reference_date or today()),
        format=nic_format,
        birth_year=birth_year,
        normalized_day_of_year=day_of_year,
    )


def parse(raw: str, reference_date: date | None = None) -> DecodedInfo:
    """Validate then decode a NIC, failing fast on invalid input.

    Raises:
        NicValidationError: If validate() rejects the input.
        NicDecodeError: If a validated NIC still cannot be decoded.
    """
    validation = validate(raw)
    if not validation.valid or validation.format is None:
        logger.debug("NIC rejected (code=%s)", validation.error_code)
        raise NicValidationError(validation.error_code or NicErrorCode.INVALID_FORMAT)

    try:
        return decode(raw, validation.format, reference_date)
    except NicDecodeError as exc:
        logger.error("Validated NIC failed to decode (format=%s, code=%s)", validation.format.value, exc.code.value)
        raise
