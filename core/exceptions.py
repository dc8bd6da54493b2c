"""
core/exceptions.py - Typed exceptions for txwatch.

Every error carries an ErrorCode so callers can map it to an HTTP
status or a degraded result without parsing messages.
"""

from typing import Optional

from core.constants import ErrorCode


class TxWatchError(Exception):
    """Base exception for txwatch."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        message: str = "",
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "error_code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TxWatchError):
    """Malformed user input (surfaced as a client error)."""
    pass


class InfraError(TxWatchError):
    """Errors talking to the node."""
    pass


class TransportError(InfraError):
    """Request could not be sent or the response could not be read."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        code: ErrorCode = ErrorCode.INFRA_RPC_TRANSPORT,
    ):
        super().__init__(code, message, details)


class RPCError(InfraError):
    """The node answered with an error envelope."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(ErrorCode.INFRA_RPC_ERROR, message, details)


class DecodeError(TxWatchError):
    """Node response is missing a field or has the wrong shape."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        code: ErrorCode = ErrorCode.DECODE_MISSING_RESULT,
    ):
        super().__init__(code, message, details)


class MalformedBlockError(DecodeError):
    """Block transaction list is missing or an entry is incomplete."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, details, code=ErrorCode.BLOCK_MALFORMED)
