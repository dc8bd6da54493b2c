"""
core - Core utilities and models for txwatch.

This package contains:
- models.py: Data models (Transaction, BlockSnapshot)
- constants.py: Error codes and defaults
- exceptions.py: Typed exceptions with error codes
- math.py: Hex quantity codec
- validators.py: Address validation
- logging.py: Structured JSON logging
"""

from core.constants import ErrorCode
from core.exceptions import (
    DecodeError,
    InfraError,
    MalformedBlockError,
    RPCError,
    TransportError,
    TxWatchError,
    ValidationError,
)
from core.logging import get_logger, setup_logging
from core.models import BlockSnapshot, Transaction
from core.validators import validate_address

__all__ = [
    "ErrorCode",
    "TxWatchError",
    "ValidationError",
    "InfraError",
    "TransportError",
    "RPCError",
    "DecodeError",
    "MalformedBlockError",
    "get_logger",
    "setup_logging",
    "Transaction",
    "BlockSnapshot",
    "validate_address",
]
