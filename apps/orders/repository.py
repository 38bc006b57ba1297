"""Repository layer for persisting orders.

This module contains the in-memory implementation of the
``OrderRepository`` and ``OrderQueryRepository`` ports. It stands in for a
database: orders are kept in a dict keyed by order id, and every access
goes through a re-entrant lock so concurrent requests can save and read
safely.
"""

import logging
import threading
from typing import Dict, List

from .domain import Order, OrderId, OrderStatus
from .ports import OrderNotFound, OrderQueryRepository, OrderRepository

logger = logging.getLogger("orders.repository")


class InMemoryOrderRepository(OrderRepository, OrderQueryRepository):
    """Thread-safe, process-local order store.

    Orders are returned in insertion order by ``find_all`` and
    ``find_by_status``. Saving an order whose id is already stored replaces
    it in place.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._store: Dict[str, Order] = {}

    def save(self, order: Order) -> OrderId:
        """Store the order and return its id."""
        with self._lock:
            self._store[order.id.value] = order
        logger.debug(
            "order saved",
            extra={"order_id": order.id.value, "items": len(order.items), "status": order.status.value},
        )
        return order.id

    def find_by_id(self, order_id: OrderId) -> Order:
        with self._lock:
            order = self._store.get(order_id.value)
        if order is None:
            raise OrderNotFound(f"Order not found: {order_id.value}")
        return order

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        with self._lock:
            return [o for o in self._store.values() if o.status == status]

    def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        """Return a slice of stored orders.

        Args:
            limit: Maximum number of orders to return (must be >= 0).
            offset: Number of orders to skip (must be >= 0).

        Raises:
            ValueError: If ``limit`` or ``offset`` is negative.
        """
        if limit < 0 or offset < 0:
            raise ValueError("limit and offset must be non-negative")
        with self._lock:
            return list(self._store.values())[offset:offset + limit]

    def exists(self, order_id: OrderId) -> bool:
        with self._lock:
            return order_id.value in self._store

    def count(self) -> int:
        with self._lock:
            return len(self._store)

    def count_by_status(self, status: OrderStatus) -> int:
        with self._lock:
            return sum(1 for o in self._store.values() if o.status == status)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
        logger.debug("all orders cleared")
