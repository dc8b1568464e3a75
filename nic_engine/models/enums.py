"""Domain enums used across the decoder, the calculators and Pydantic schemas.

All enums use str mixin for JSON serialization.
"""

from __future__ import annotations

from enum import Enum


class NicFormat(str, Enum):
    """NIC layout — drives field offsets during decoding."""

    OLD = "old"  # YYDDDNNNNC
    NEW = "new"  # YYYYDDDNNNNN


class Gender(str, Enum):
    """Holder gender, encoded by the +500 day-of-year offset."""

    MALE = "male"
    FEMALE = "female"


class NicErrorCode(str, Enum):
    """Why a candidate string is not a well-formed NIC."""

    REQUIRED = "required"
    INVALID_OLD_FORMAT = "invalid_old_format"
    INVALID_NEW_FORMAT = "invalid_new_format"
    INVALID_FORMAT = "invalid_format"
    INVALID_DAY_OF_YEAR = "invalid_day_of_year"

    @property
    def message_key(self) -> str:
        """Translation key consumed by the display layer, e.g. 'validation.invalidOldFormat'."""
        head, *rest = self.value.split("_")
        return "validation." + head + "".join(part.capitalize() for part in rest)


class NicDecodeErrorCode(str, Enum):
    """Decode-stage failures — unreachable for year-consistent input."""

    UNKNOWN_GENDER = "unknown_gender"
    INVALID_DATE = "invalid_date"
