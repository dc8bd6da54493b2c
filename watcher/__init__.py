"""
watcher - Address subscriptions and transaction lookup.
"""

from watcher.registry import SubscriptionRegistry
from watcher.service import ParserService

__all__ = [
    "SubscriptionRegistry",
    "ParserService",
]
