"""NIC JSON API — FastAPI router over the validator, decoder and age calculator.

Thin async wrappers around the pure functions; no state, and the NIC number
itself is never logged.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from nic_engine.calculators.age import age_at, today
from nic_engine.decoders.nic import NicDecodeError, NicValidationError, parse, sanitize_nic_input, validate
from nic_engine.formatters import error_message, format_age, format_birth_date
from nic_engine.schemas.nic import (
    AgeRequest,
    AgeResponse,
    DecodedResponse,
    ErrorResponse,
    NicRequest,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nic", tags=["nic"])


def _candidate(body: NicRequest) -> str:
    return sanitize_nic_input(body.nic) if body.sanitize else body.nic


@router.post("/validate", response_model=ValidationResponse)
async def validate_nic(body: NicRequest) -> ValidationResponse:
    """Classify the submitted string without decoding it."""
    result = validate(_candidate(body))
    code = result.error_code
    if result.valid or code is None:
        return ValidationResponse(valid=True, format=result.format)

    logger.debug("NIC validation failed (code=%s)", code.value)
    return ValidationResponse(
        valid=False,
        error_code=code,
        message=error_message(code),
        message_key=code.message_key,
    )


@router.post(
    "/parse",
    response_model=DecodedResponse,
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def parse_nic(body: NicRequest) -> DecodedResponse | JSONResponse:
    """Decode birth date, gender and age from a NIC."""
    try:
        info = parse(_candidate(body), body.reference_date)
    except NicValidationError as exc:
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(error_code=exc.code.value, message=error_message(exc.code)).model_dump(),
        )
    except NicDecodeError as exc:
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error_code=exc.code.value, message=error_message(exc.code)).model_dump(),
        )

    logger.info("NIC decoded (format=%s)", info.format.value)
    return DecodedResponse(
        **info.model_dump(),
        birth_date_display=format_birth_date(info.birth_date),
        age_display=format_age(info.age),
    )


@router.post("/age", response_model=AgeResponse)
async def compute_age(body: AgeRequest) -> AgeResponse:
    """Recompute an age breakdown against an arbitrary reference date."""
    age = age_at(body.birth_date, body.reference_date or today())
    return AgeResponse(**age.model_dump(), display=format_age(age))
