"""In-process adapters for the stock and event-publishing ports.

These adapters implement ``StockAvailabilityChecker`` and
``DomainEventPublisher`` without any network calls. They back the HTTP and
CLI entry points in development and give tests deterministic behavior.
"""

import logging
import threading
from typing import Dict, List, Mapping, Optional

from .events import DomainEvent
from .ports import DomainEventPublisher, StockAvailabilityChecker, StockUnavailable

logger = logging.getLogger("orders.adapters")

DEFAULT_STOCK_LEVELS = {
    "SKU-001": 100,
    "SKU-002": 50,
    "SKU-003": 0,
}
DEFAULT_STOCK_LEVEL = 100


class InMemoryStockChecker(StockAvailabilityChecker):
    """Stock levels kept in a dict: SKU -> available quantity.

    SKUs that were never seeded are treated as having ``default_level``
    units. ``reserve`` checks and decrements under one lock, so two
    concurrent reservations of the same SKU can never oversell it.
    """

    def __init__(self, stock_levels: Optional[Mapping[str, int]] = None, default_level: int = DEFAULT_STOCK_LEVEL):
        """Seed the stock levels.

        Args:
            stock_levels: Initial SKU -> quantity map. Defaults to
                ``DEFAULT_STOCK_LEVELS``.
            default_level: Quantity assumed for unknown SKUs.
        """
        self._lock = threading.Lock()
        self._levels: Dict[str, int] = dict(DEFAULT_STOCK_LEVELS if stock_levels is None else stock_levels)
        self.default_level = default_level

    def available(self, sku: str) -> int:
        with self._lock:
            return self._levels.get(sku, self.default_level)

    def check_availability(self, sku: str, quantity: int) -> bool:
        available = self.available(sku)
        ok = available >= quantity
        logger.debug(
            "stock check",
            extra={"sku": sku, "requested": quantity, "available": available, "sufficient": ok},
        )
        return ok

    def reserve(self, sku: str, quantity: int) -> None:
        """Decrement the stock of ``sku`` by ``quantity``.

        Raises:
            StockUnavailable: If fewer than ``quantity`` units are left. Stock
                is not touched in that case.
        """
        with self._lock:
            current = self._levels.get(sku, self.default_level)
            if current < quantity:
                raise StockUnavailable(
                    f"Insufficient stock for {sku}: available={current}, requested={quantity}"
                )
            self._levels[sku] = current - quantity
            remaining = self._levels[sku]
        logger.debug("stock reserved", extra={"sku": sku, "quantity": quantity, "remaining": remaining})

    def add_stock(self, sku: str, quantity: int) -> None:
        with self._lock:
            self._levels[sku] = self._levels.get(sku, 0) + quantity
            total = self._levels[sku]
        logger.debug("stock added", extra={"sku": sku, "added": quantity, "total": total})

    def clear_stock(self) -> None:
        """Forget every seeded level; all SKUs fall back to ``default_level``."""
        with self._lock:
            self._levels.clear()
        logger.debug("all stock cleared")


class LoggingEventPublisher(DomainEventPublisher):
    """Publisher that writes events to the log instead of a broker.

    Every published event is also kept in ``published_events`` so callers
    (and tests) can see what went out.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._published: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            self._published.append(event)
        logger.info(
            event.event_type,
            extra={
                "event_id": event.event_id,
                "event_type": event.event_type,
                "occurred_at": event.occurred_at.isoformat(),
                **event.payload(),
            },
        )

    @property
    def published_events(self) -> List[DomainEvent]:
        with self._lock:
            return list(self._published)

    def clear_events(self) -> None:
        with self._lock:
            self._published.clear()
        logger.debug("all published events cleared")
