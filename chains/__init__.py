"""
chains/ - Blockchain interaction layer.

Modules:
- providers: JSON-RPC gateway to the node
- block: Transaction extraction and address filtering
"""

from chains.providers import (
    RPCProvider,
    RPCStats,
)
from chains.block import (
    extract_transactions,
    filter_transactions,
    raw_transactions,
)

__all__ = [
    # Providers
    "RPCProvider",
    "RPCStats",
    # Block
    "extract_transactions",
    "filter_transactions",
    "raw_transactions",
]
