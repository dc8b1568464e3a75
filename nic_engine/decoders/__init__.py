"""Deterministic NIC decoders — validation, field extraction, parsing."""

from nic_engine.decoders.nic import (
    NicDecodeError,
    NicValidationError,
    decode,
    parse,
    sanitize_nic_input,
    validate,
)

__all__ = [
    "NicDecodeError",
    "NicValidationError",
    "decode",
    "parse",
    "sanitize_nic_input",
    "validate",
]
