"""Controllable fakes for the outbound ports.

Each fake records what the service asked of it and can be told to fail,
so tests drive every branch of ``PlaceOrderService`` deterministically.
"""

from apps.orders.ports import (
    DomainEventPublisher,
    OrderNotFound,
    OrderRepository,
    StockAvailabilityChecker,
    StockUnavailable,
)


class FakeOrderRepository(OrderRepository):
    """Dict-backed repository that can be told to fail on save."""

    def __init__(self, should_fail_save=False):
        self.should_fail_save = should_fail_save
        self.saved = {}

    def save(self, order):
        if self.should_fail_save:
            raise RuntimeError("Database connection failed")
        self.saved[order.id.value] = order
        return order.id

    def find_by_id(self, order_id):
        try:
            return self.saved[order_id.value]
        except KeyError:
            raise OrderNotFound(order_id.value) from None

    def exists(self, order_id):
        return order_id.value in self.saved

    def count(self):
        return len(self.saved)


class FakeStockChecker(StockAvailabilityChecker):
    """Stock checker whose answers are fixed up front.

    Args:
        available: Answer for every SKU not listed in ``unavailable_skus``.
        unavailable_skus: SKUs that always fail the check.
        failing_skus: SKUs whose check raises instead of answering.
    """

    def __init__(self, available=True, unavailable_skus=(), failing_skus=()):
        self.available = available
        self.unavailable_skus = set(unavailable_skus)
        self.failing_skus = set(failing_skus)
        self.checked = []
        self.reserved = []

    def check_availability(self, sku, quantity):
        self.checked.append((sku, quantity))
        if sku in self.failing_skus:
            raise ConnectionError(f"inventory unreachable for {sku}")
        return self.available and sku not in self.unavailable_skus

    def reserve(self, sku, quantity):
        if sku in self.unavailable_skus:
            raise StockUnavailable(sku)
        self.reserved.append((sku, quantity))


class FakeEventPublisher(DomainEventPublisher):
    def __init__(self, should_fail=False):
        self.should_fail = should_fail
        self.published = []

    def publish(self, event):
        if self.should_fail:
            raise RuntimeError("Message broker unavailable")
        self.published.append(event)
