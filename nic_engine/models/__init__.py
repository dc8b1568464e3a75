"""Domain enums for NIC decoding."""

from __future__ import annotations

from nic_engine.models.enums import Gender, NicDecodeErrorCode, NicErrorCode, NicFormat

__all__ = [
    "Gender",
    "NicDecodeErrorCode",
    "NicErrorCode",
    "NicFormat",
]
