"""Order placement use case.

``PlaceOrderService`` is the single entry point that inbound adapters (the
DRF views and the CLI) call to place an order. It runs a fixed pipeline:

1. validate the command,
2. check and reserve stock for every item,
3. create the ``Order`` aggregate,
4. persist it,
5. publish the events the aggregate raised.

The pipeline stops at the first failing step and raises an ``OrderError``.
Nothing is retried and nothing is compensated: stock reserved in step 2
stays reserved if step 4 or 5 fails, and an order saved in step 4 stays
saved if step 5 fails.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .domain import Money, Order, OrderId, OrderItem
from .errors import (
    DomainViolation,
    InsufficientStock,
    InvalidOrder,
    OrderPlacementFailed,
)
from .ports import DomainEventPublisher, OrderRepository, StockAvailabilityChecker

logger = logging.getLogger("orders.service")


@dataclass(frozen=True)
class PlaceOrderCommand:
    """Request to place one order.

    Attributes:
        items: Line items in the order the caller declared them.
        request_id: Caller-side correlation id. Used for logging only; the
            service does not deduplicate on it.
    """

    items: Tuple[OrderItem, ...]
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def from_lines(cls, lines: Iterable[tuple], request_id: str | None = None) -> "PlaceOrderCommand":
        """Build a command from raw ``(sku, unit_price, quantity)`` triples.

        Raises:
            InvalidOrder: If a line cannot be turned into an ``OrderItem``.
        """
        items = []
        for position, (sku, unit_price, quantity) in enumerate(lines, start=1):
            try:
                items.append(OrderItem.of(sku, Money.of(unit_price), quantity))
            except ValueError as exc:
                raise InvalidOrder(f"Invalid item at position {position}: {exc}", cause=exc) from exc
        if request_id:
            return cls(items=tuple(items), request_id=request_id)
        return cls(items=tuple(items))


class PlaceOrderService:
    """Application service that places orders through the outbound ports."""

    def __init__(
        self,
        repository: OrderRepository,
        stock_checker: StockAvailabilityChecker,
        event_publisher: DomainEventPublisher,
    ):
        """Initialize the service with its collaborators.

        Args:
            repository: Port used to persist the new order.
            stock_checker: Port used to check and reserve stock.
            event_publisher: Port that receives the raised domain events.
        """
        self.repository = repository
        self.stock_checker = stock_checker
        self.event_publisher = event_publisher

    def execute(self, command: PlaceOrderCommand) -> OrderId:
        """Place an order.

        Args:
            command: The items to order and a correlation id.

        Returns:
            The identifier of the persisted order.

        Raises:
            InvalidOrder: The command has no items.
            InsufficientStock: At least one SKU could not be reserved.
            DomainViolation: The aggregate rejected the items.
            OrderPlacementFailed: Persisting or publishing failed.
        """
        items = self._validate(command)
        self._reserve_stock(command, items)
        order = self._create_aggregate(command, items)
        order_id = self._persist(command, order)
        self._publish_events(command, order)

        logger.info(
            "order placed",
            extra={
                "request_id": command.request_id,
                "order_id": order_id.value,
                "total": str(order.total()),
                "items": len(order.items),
            },
        )
        return order_id

    def _validate(self, command: PlaceOrderCommand) -> List[OrderItem]:
        items = list(command.items)
        if not items:
            logger.warning("order rejected: no items", extra={"request_id": command.request_id})
            raise InvalidOrder("Order must contain at least one item")
        return items

    def _reserve_stock(self, command: PlaceOrderCommand, items: List[OrderItem]) -> None:
        unavailable: List[str] = []
        for item in items:
            try:
                self.stock_checker.check_and_reserve(item.sku, item.quantity)
            except Exception as exc:
                logger.info(
                    "stock reservation failed",
                    extra={"request_id": command.request_id, "sku": item.sku, "reason": str(exc)},
                )
                unavailable.append(item.sku)

        if unavailable:
            logger.warning(
                "order rejected: insufficient stock",
                extra={"request_id": command.request_id, "unavailable_items": unavailable},
            )
            raise InsufficientStock(
                f"Items out of stock: {', '.join(unavailable)}",
                unavailable_items=unavailable,
            )

    def _create_aggregate(self, command: PlaceOrderCommand, items: List[OrderItem]) -> Order:
        try:
            return Order.create(items)
        except Exception as exc:
            logger.warning(
                "order rejected: domain violation",
                extra={"request_id": command.request_id, "reason": str(exc)},
            )
            raise DomainViolation(str(exc) or "Failed to create order", cause=exc) from exc

    def _persist(self, command: PlaceOrderCommand, order: Order) -> OrderId:
        try:
            return self.repository.save(order)
        except Exception as exc:
            logger.error(
                "order persistence failed",
                extra={"request_id": command.request_id, "order_id": order.id.value},
                exc_info=True,
            )
            raise OrderPlacementFailed(f"Failed to persist order: {exc}", cause=exc) from exc

    def _publish_events(self, command: PlaceOrderCommand, order: Order) -> None:
        events = order.pull_domain_events()
        if not events:
            return
        try:
            self.event_publisher.publish_all(events)
        except Exception as exc:
            # the order is already saved at this point and stays saved
            logger.error(
                "domain event publishing failed",
                extra={"request_id": command.request_id, "order_id": order.id.value, "events": len(events)},
                exc_info=True,
            )
            raise OrderPlacementFailed(f"Failed to publish domain events: {exc}", cause=exc) from exc
