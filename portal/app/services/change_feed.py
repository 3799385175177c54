"""
In-process realtime change feed.

Notifications are hints that something changed in a table; subscribers are
expected to re-read. There is no ordering or delivery guarantee.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from uuid import UUID, uuid4

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, Dict[str, Any]], None]


@dataclass(frozen=True)
class Subscription:
    table: str
    row_filter: Dict[str, str]
    callback: ChangeCallback
    id: UUID = field(default_factory=uuid4)

    def matches(self, table: str, row: Dict[str, Any]) -> bool:
        if table != self.table:
            return False
        return all(
            key in row and str(row[key]) == value
            for key, value in self.row_filter.items()
        )


class ChangeFeed:
    def __init__(self):
        self._subscriptions: Dict[UUID, Subscription] = {}

    def subscribe(
        self,
        table: str,
        row_filter: Optional[Dict[str, Any]],
        on_change: ChangeCallback,
    ) -> UUID:
        subscription = Subscription(
            table=table,
            row_filter={k: str(v) for k, v in (row_filter or {}).items()},
            callback=on_change,
        )
        self._subscriptions[subscription.id] = subscription
        logger.debug(f"Subscribed {subscription.id} to {table} {subscription.row_filter}")
        return subscription.id

    def unsubscribe(self, handle: UUID) -> bool:
        return self._subscriptions.pop(handle, None) is not None

    def publish(self, table: str, row: Dict[str, Any]) -> int:
        """Notify matching subscribers; returns how many were called."""
        delivered = 0
        for subscription in list(self._subscriptions.values()):
            if not subscription.matches(table, row):
                continue
            try:
                subscription.callback(table, row)
                delivered += 1
            except Exception:
                # A broken subscriber must not affect the writer or other subscribers
                logger.exception(f"Change subscriber {subscription.id} failed for {table}")
        return delivered

    def __len__(self) -> int:
        return len(self._subscriptions)
