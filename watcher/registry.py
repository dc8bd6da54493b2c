"""
watcher/registry.py - Subscription registry.

A set of watched addresses. Entries are added once and never removed.
Addresses must be validated before they reach the registry.
"""

import threading

from core.logging import get_logger

logger = get_logger("txwatch.registry")


class SubscriptionRegistry:
    """Thread-safe set of subscribed addresses."""

    def __init__(self):
        self._addresses: set[str] = set()
        self._lock = threading.Lock()

    def subscribe(self, address: str) -> bool:
        """
        Add an address.

        Returns:
            True if newly added, False if already present
        """
        with self._lock:
            if address in self._addresses:
                return False
            self._addresses.add(address)

        logger.info("Subscribed", extra={"context": {"address": address}})
        return True

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return address in self._addresses

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)
