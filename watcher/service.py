"""
watcher/service.py - Parser service.

Orchestrates the RPC gateway, transaction extraction and the
subscription registry. Only the latest block is ever inspected: a
transaction for a subscribed address that landed in an earlier block
is not found by transactions_for().

Degraded mode: current_height() and transactions_for() log node
failures and return 0 / [] instead of raising. A height of 0 means
"unknown", and an empty list does not distinguish "no match" from
"fetch failed".
"""

from chains.block import filter_transactions, raw_transactions
from chains.providers import RPCProvider
from core.constants import UNKNOWN_BLOCK_HEIGHT
from core.exceptions import TxWatchError
from core.logging import get_logger
from core.models import BlockSnapshot, Transaction
from watcher.registry import SubscriptionRegistry

logger = get_logger("txwatch.service")


class ParserService:
    """Address subscriptions and latest-block transaction lookup."""

    def __init__(
        self,
        provider: RPCProvider,
        registry: SubscriptionRegistry | None = None,
    ):
        self.provider = provider
        self.registry = registry if registry is not None else SubscriptionRegistry()

    async def current_height(self) -> int:
        """Latest block height, or 0 if the node could not be asked."""
        try:
            return await self.provider.get_block_number()
        except TxWatchError as e:
            logger.warning(
                f"Error getting current block: {e}",
                extra={"context": e.to_dict()},
            )
            return UNKNOWN_BLOCK_HEIGHT

    def subscribe(self, address: str) -> bool:
        """Register an already validated address."""
        return self.registry.subscribe(address)

    async def transactions_for(self, address: str) -> list[Transaction]:
        """
        Transactions in the latest block sent from or to `address`.

        Returns an empty list when nothing matches or any step fails.
        """
        try:
            block_number = await self.provider.get_block_number()
            block = await self.provider.get_block_by_number(block_number, full_transactions=True)
            transactions = filter_transactions(block, address)
        except TxWatchError as e:
            logger.warning(
                f"Error getting transactions: {e}",
                extra={"context": {"address": address, **e.to_dict()}},
            )
            return []

        logger.debug(
            f"Scanned block {block_number}",
            extra={"context": {
                "address": address,
                "block_number": block_number,
                "matched": len(transactions),
            }},
        )
        return transactions

    async def latest_block(self) -> BlockSnapshot:
        """
        Latest block with its raw transaction list.

        Raises:
            TxWatchError: Any gateway or block shape failure
        """
        block_number = await self.provider.get_block_number()
        block = await self.provider.get_block_by_number(block_number, full_transactions=True)
        return BlockSnapshot(
            block_number=block_number,
            transactions=raw_transactions(block),
        )

    def health(self) -> dict:
        return {
            "subscriptions": len(self.registry),
            "rpc": self.provider.get_stats_summary(),
        }
