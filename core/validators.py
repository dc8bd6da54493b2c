"""
Address validation for txwatch.

CONTRACTS:
- validate_address(): raises ValidationError naming the first rule broken

Rules, applied in order:
1. length must be 42
2. must start with "0x"
3. must match ^0x[0-9a-fA-F]{40}$

USAGE:
    from core.validators import validate_address

    validate_address(address)  # raises ValidationError
"""

from typing import Any

from core.constants import (
    ADDRESS_LENGTH,
    ADDRESS_PATTERN,
    ADDRESS_PREFIX,
    ErrorCode,
)
from core.exceptions import ValidationError


def validate_address(address: Any) -> None:
    """
    Validate the syntactic form of an address.

    Args:
        address: Candidate address string

    Raises:
        ValidationError: With a distinct code per failed rule
    """
    if not isinstance(address, str) or len(address) != ADDRESS_LENGTH:
        raise ValidationError(
            ErrorCode.ADDRESS_INVALID_LENGTH,
            f"address must be {ADDRESS_LENGTH} characters long",
            details={"length": len(address) if isinstance(address, str) else None},
        )

    if address[:2] != ADDRESS_PREFIX:
        raise ValidationError(
            ErrorCode.ADDRESS_MISSING_PREFIX,
            f"address must start with '{ADDRESS_PREFIX}'",
        )

    if not ADDRESS_PATTERN.match(address):
        raise ValidationError(
            ErrorCode.ADDRESS_INVALID_CHARS,
            "address contains invalid characters",
        )
