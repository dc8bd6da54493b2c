"""
core/math.py - Hex quantity codec.

JSON-RPC transmits integers as 0x-prefixed, base-16 strings
("quantities"). These helpers convert between that form and int.
"""

from typing import Any

from core.constants import ErrorCode, MAX_QUANTITY
from core.exceptions import DecodeError


def hex_to_int(value: Any, field: str = "result") -> int:
    """
    Decode a 0x-prefixed hex quantity.

    Args:
        value: Raw value from a decoded JSON-RPC response
        field: Field name used in the error message

    Returns:
        Non-negative integer

    Raises:
        DecodeError: If value is missing, not a string, not valid hex,
            or exceeds MAX_QUANTITY
    """
    if value is None:
        raise DecodeError(f"{field} is missing", details={"field": field})

    if not isinstance(value, str):
        raise DecodeError(
            f"{field} is not a string: {type(value).__name__}",
            details={"field": field, "value": repr(value)},
            code=ErrorCode.DECODE_INVALID_HEX,
        )

    if not value.startswith("0x") or len(value) == 2:
        raise DecodeError(
            f"{field} is not a 0x-prefixed hex quantity: {value!r}",
            details={"field": field, "value": value},
            code=ErrorCode.DECODE_INVALID_HEX,
        )

    digits = value[2:]
    # int(..., 16) also accepts "+", "_" and whitespace
    if any(c not in "0123456789abcdefABCDEF" for c in digits):
        raise DecodeError(
            f"{field} contains non-hex characters: {value!r}",
            details={"field": field, "value": value},
            code=ErrorCode.DECODE_INVALID_HEX,
        )

    number = int(digits, 16)
    if number > MAX_QUANTITY:
        raise DecodeError(
            f"{field} overflows a 64-bit integer: {value}",
            details={"field": field, "value": value},
            code=ErrorCode.DECODE_INVALID_HEX,
        )
    return number


def int_to_hex(number: int) -> str:
    """
    Encode a non-negative integer as a lowercase 0x-prefixed quantity.

    Example: 16 -> "0x10"
    """
    if number < 0:
        raise ValueError(f"quantity must be non-negative, got {number}")
    return hex(number)
