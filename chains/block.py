"""
chains/block.py - Transaction extraction from raw blocks.

Provides:
- Total decoding of a block's embedded transaction list
- Participant filtering by address
"""

from typing import Any

from core.exceptions import MalformedBlockError
from core.models import Transaction

REQUIRED_TX_FIELDS = ("from", "value", "hash")


def raw_transactions(block: Any) -> list:
    """
    Return the block's transaction list as sent by the node.

    Raises:
        MalformedBlockError: If the block is not an object or the list
            is missing or not a list
    """
    if not isinstance(block, dict):
        raise MalformedBlockError(
            f"Block is not an object: {type(block).__name__}",
        )

    txs = block.get("transactions")
    if txs is None:
        raise MalformedBlockError(
            "Block has no transactions field",
            details={"block_number": block.get("number")},
        )
    if not isinstance(txs, list):
        raise MalformedBlockError(
            f"Block transactions is not a list: {type(txs).__name__}",
            details={"block_number": block.get("number")},
        )
    return txs


def _decode_transaction(entry: Any, index: int) -> Transaction:
    if not isinstance(entry, dict):
        # A bare hash means full transaction detail was not requested
        raise MalformedBlockError(
            f"Transaction {index} is not an object",
            details={"index": index, "entry": repr(entry)},
        )

    for name in REQUIRED_TX_FIELDS:
        if not isinstance(entry.get(name), str):
            raise MalformedBlockError(
                f"Transaction {index} has no string '{name}'",
                details={"index": index, "field": name, "hash": entry.get("hash")},
            )

    to_address = entry.get("to")
    if to_address is not None and not isinstance(to_address, str):
        raise MalformedBlockError(
            f"Transaction {index} has a non-string 'to'",
            details={"index": index, "field": "to", "hash": entry["hash"]},
        )

    return Transaction(
        from_address=entry["from"],
        to_address=to_address,
        value=entry["value"],
        hash=entry["hash"],
    )


def extract_transactions(block: Any) -> list[Transaction]:
    """
    Decode every transaction in a block, in node order.

    Raises:
        MalformedBlockError: On a missing list or an incomplete entry
    """
    return [
        _decode_transaction(entry, index)
        for index, entry in enumerate(raw_transactions(block))
    ]


def filter_transactions(block: Any, address: str) -> list[Transaction]:
    """
    Transactions sent from or to `address`.

    Matching is an exact string comparison. Node order is preserved and a
    transaction matching on both sides appears once. Contract creations
    (no "to") can only match on "from".

    Raises:
        MalformedBlockError: On a missing list or an incomplete entry
    """
    return [tx for tx in extract_transactions(block) if tx.involves(address)]
