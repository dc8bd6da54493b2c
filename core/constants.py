"""
core/constants.py - Enums, defaults, and constants.

Only truly constant values here. Config values go to config/server.yaml
"""

import re
from enum import Enum
from typing import Final


# =============================================================================
# ERROR CODES
# =============================================================================

class ErrorCode(str, Enum):
    """
    Canonical error codes.

    Every TxWatchError carries one of these. Codes are grouped by the
    layer that raises them.
    """
    # Input validation (client faults)
    ADDRESS_INVALID_LENGTH = "ADDRESS_INVALID_LENGTH"
    ADDRESS_MISSING_PREFIX = "ADDRESS_MISSING_PREFIX"
    ADDRESS_INVALID_CHARS = "ADDRESS_INVALID_CHARS"

    # Infrastructure (talking to the node)
    INFRA_RPC_TRANSPORT = "INFRA_RPC_TRANSPORT"
    INFRA_RPC_TIMEOUT = "INFRA_RPC_TIMEOUT"
    INFRA_RPC_ERROR = "INFRA_RPC_ERROR"

    # Response shape
    DECODE_MISSING_RESULT = "DECODE_MISSING_RESULT"
    DECODE_INVALID_HEX = "DECODE_INVALID_HEX"
    DECODE_INVALID_ENVELOPE = "DECODE_INVALID_ENVELOPE"
    BLOCK_MALFORMED = "BLOCK_MALFORMED"

    UNKNOWN = "UNKNOWN"


# =============================================================================
# ADDRESSES
# =============================================================================

ADDRESS_LENGTH: Final[int] = 42
ADDRESS_PREFIX: Final[str] = "0x"
ADDRESS_PATTERN: Final[re.Pattern] = re.compile(r"^0x[0-9a-fA-F]{40}$")


# =============================================================================
# JSON-RPC
# =============================================================================

JSONRPC_VERSION: Final[str] = "2.0"
METHOD_BLOCK_NUMBER: Final[str] = "eth_blockNumber"
METHOD_GET_BLOCK_BY_NUMBER: Final[str] = "eth_getBlockByNumber"

# Heights above this are rejected as undecodable
MAX_QUANTITY: Final[int] = 2**63 - 1

# Height returned when the node could not be asked
UNKNOWN_BLOCK_HEIGHT: Final[int] = 0


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_RPC_URL: Final[str] = "https://ethereum-rpc.publicnode.com"
DEFAULT_RPC_TIMEOUT_SECONDS: Final[int] = 10
DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_PORT: Final[int] = 8080
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
