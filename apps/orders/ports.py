"""Outbound ports used by the order placement use case.

The application service depends on these protocols only. Concrete
adapters (in-memory repository, stock checker, logging publisher, test
fakes) subclass them explicitly so they inherit the default composed
operations ``check_and_reserve`` and ``publish_all``.

Ports report failure by raising. The use case catches whatever they raise
and reclassifies it into the ``OrderError`` taxonomy.
"""

from typing import List, Protocol, Sequence

from .domain import Order, OrderId, OrderStatus
from .events import DomainEvent


class OrderNotFound(LookupError):
    """No order is stored under the requested id."""


class StockUnavailable(RuntimeError):
    """A SKU does not have enough stock to cover the requested quantity."""


class OrderRepository(Protocol):
    """Port describing order persistence."""

    def save(self, order: Order) -> OrderId:
        """Persist the order and return its identifier.

        Raises:
            Exception: Any storage failure.
        """
        raise NotImplementedError()

    def find_by_id(self, order_id: OrderId) -> Order:
        """Return the stored order.

        Raises:
            OrderNotFound: If nothing is stored under ``order_id``.
        """
        raise NotImplementedError()

    def exists(self, order_id: OrderId) -> bool:
        raise NotImplementedError()

    def count(self) -> int:
        raise NotImplementedError()


class OrderQueryRepository(Protocol):
    """Read-only port for listing and counting orders."""

    def find_by_id(self, order_id: OrderId) -> Order:
        raise NotImplementedError()

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        raise NotImplementedError()

    def find_all(self, limit: int = 100, offset: int = 0) -> List[Order]:
        raise NotImplementedError()

    def exists(self, order_id: OrderId) -> bool:
        raise NotImplementedError()

    def count(self) -> int:
        raise NotImplementedError()

    def count_by_status(self, status: OrderStatus) -> int:
        raise NotImplementedError()


class StockAvailabilityChecker(Protocol):
    """Port describing inventory checks and reservations."""

    def check_availability(self, sku: str, quantity: int) -> bool:
        """Return True if ``quantity`` units of ``sku`` are available."""
        raise NotImplementedError()

    def reserve(self, sku: str, quantity: int) -> None:
        """Reserve ``quantity`` units of ``sku``.

        Raises:
            StockUnavailable: If the stock cannot cover the quantity.
        """
        raise NotImplementedError()

    def check_and_reserve(self, sku: str, quantity: int) -> None:
        """Check availability, then reserve.

        Raises:
            StockUnavailable: If the check answers False; ``reserve`` is not
                called in that case.
        """
        if not self.check_availability(sku, quantity):
            raise StockUnavailable(f"Insufficient stock for {sku}")
        self.reserve(sku, quantity)


class DomainEventPublisher(Protocol):
    """Port for handing domain events to the outside world."""

    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError()

    def publish_all(self, events: Sequence[DomainEvent]) -> None:
        """Publish events one by one, stopping at the first failure.

        Events after the failing one are not attempted.
        """
        for event in events:
            self.publish(event)
