"""Pydantic schemas for the NIC validator, decoder and age calculator.

Pure data classes — no business logic beyond shape invariants. Every model is
frozen: results are built once per call and never mutated afterwards.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from nic_engine.models.enums import Gender, NicErrorCode, NicFormat


# ---------------------------------------------------------------------------
# Validator output
# ---------------------------------------------------------------------------


class ValidationResult(BaseModel):
    """Outcome of classifying a raw string as an OLD/NEW NIC."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    format: NicFormat | None = None
    error_code: NicErrorCode | None = None

    @model_validator(mode="after")
    def check_exclusive(self) -> ValidationResult:
        """Valid results carry a format, invalid ones an error code — never both."""
        if self.valid and (self.format is None or self.error_code is not None):
            msg = "A valid result must have a format and no error code"
            raise ValueError(msg)
        if not self.valid and (self.error_code is None or self.format is not None):
            msg = "An invalid result must have an error code and no format"
            raise ValueError(msg)
        return self


# ---------------------------------------------------------------------------
# Age calculator output
# ---------------------------------------------------------------------------


class AgeBreakdown(BaseModel):
    """Elapsed years/months/days with all borrows resolved."""

    model_config = ConfigDict(frozen=True)

    years: int = Field(ge=0)
    months: int = Field(ge=0, le=11)
    days: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Decoder output
# ---------------------------------------------------------------------------


class DecodedInfo(BaseModel):
    """Everything derivable from a valid NIC."""

    model_config = ConfigDict(frozen=True)

    nic: str                           # trimmed, upper-cased input
    birth_date: date
    gender: Gender
    age: AgeBreakdown
    format: NicFormat
    birth_year: int
    normalized_day_of_year: int = Field(ge=1, le=366)


# ---------------------------------------------------------------------------
# HTTP bodies
# ---------------------------------------------------------------------------


class NicRequest(BaseModel):
    """Body for /api/nic/validate and /api/nic/parse."""

    nic: str
    reference_date: date | None = None
    sanitize: bool = False             # apply the form-layer keystroke filter first


class AgeRequest(BaseModel):
    """Body for /api/nic/age."""

    birth_date: date
    reference_date: date | None = None


class ValidationResponse(ValidationResult):
    """ValidationResult plus a human-readable message for invalid input."""

    message: str | None = None
    message_key: str | None = None


class AgeResponse(AgeBreakdown):
    """AgeBreakdown plus its display string."""

    display: str


class DecodedResponse(DecodedInfo):
    """DecodedInfo plus display strings for the presentation layer."""

    birth_date_display: str
    age_display: str


class ErrorResponse(BaseModel):
    """JSON body returned for parse failures."""

    error_code: str
    message: str
