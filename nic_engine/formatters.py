"""Display helpers for decoded NIC data.

English rendering only; the presentation layer owns localisation.
"""

from __future__ import annotations

from datetime import date

from nic_engine.models.enums import NicDecodeErrorCode, NicErrorCode
from nic_engine.schemas.nic import AgeBreakdown

ERROR_MESSAGES: dict[NicErrorCode | NicDecodeErrorCode, str] = {
    NicErrorCode.REQUIRED: "Please enter an NIC number",
    NicErrorCode.INVALID_OLD_FORMAT: "Old NIC numbers have 9 digits followed by V or X",
    NicErrorCode.INVALID_NEW_FORMAT: "New NIC numbers have exactly 12 digits",
    NicErrorCode.INVALID_FORMAT: "Enter a 10-character old NIC or a 12-digit new NIC",
    NicErrorCode.INVALID_DAY_OF_YEAR: "The day-of-year digits do not match any birth date",
    NicDecodeErrorCode.UNKNOWN_GENDER: "The day-of-year digits are out of range for the birth year",
    NicDecodeErrorCode.INVALID_DATE: "The NIC does not correspond to a real birth date",
}


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_age(age: AgeBreakdown) -> str:
    """Format as "25 years, 1 month, 0 days"."""
    return ", ".join((
        _plural(age.years, "year"),
        _plural(age.months, "month"),
        _plural(age.days, "day"),
    ))


def format_birth_date(value: date | None) -> str:
    """Format as "3 May 2000"."""
    if value is None:
        return "-"
    return f"{value.day} {value:%B %Y}"


def error_message(code: NicErrorCode | NicDecodeErrorCode) -> str:
    """Human-readable explanation for a validation or decode error code."""
    return ERROR_MESSAGES[code]
