"""
core/models.py - Core data models.

Transactions are immutable snapshots as reported by the node.
Quantities stay in the node's hex string form; nothing is converted.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Transaction:
    """A transaction touching a watched address."""

    from_address: str
    to_address: str | None  # None for contract creation
    value: str
    hash: str

    def involves(self, address: str) -> bool:
        """Exact match against sender or recipient."""
        return self.from_address == address or self.to_address == address

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "hash": self.hash,
        }


@dataclass(frozen=True)
class BlockSnapshot:
    """Latest block as returned by /getBlock."""

    block_number: int
    transactions: list = field(default_factory=list)  # raw node entries

    def to_dict(self) -> dict[str, Any]:
        return {
            "blockNumber": self.block_number,
            "transactions": self.transactions,
        }
