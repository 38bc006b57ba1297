"""Domain model for orders: value objects, status machine and aggregate.

This module holds the innermost layer of the orders app. Nothing here
knows about Django, HTTP, persistence or messaging; the aggregate only
records what happened as domain events and leaves publishing to the
application service.

Invariant violations on construction raise ``ValueError``. Illegal status
transitions raise ``InvalidState`` from the error taxonomy.
"""

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import ClassVar, Iterable, List, Tuple

from .errors import InvalidState
from .events import DomainEvent, OrderPlaced, OrderStatusChanged


# ---- Value objects ----
@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with two fractional digits.

    Amounts are normalized with ROUND_HALF_UP on construction and after
    every arithmetic operation, so repeated sums never drift below the
    cent.

    Attributes:
        amount: Normalized ``Decimal`` amount (scale 2).
    """

    SCALE: ClassVar[Decimal] = Decimal("0.01")
    ZERO: ClassVar["Money"]

    amount: Decimal

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise ValueError(f"Money amount must be a Decimal, got {type(self.amount).__name__}")
        if not self.amount.is_finite():
            raise ValueError(f"Money amount must be finite: {self.amount}")
        normalized = self.amount.quantize(self.SCALE, rounding=ROUND_HALF_UP)
        if normalized < 0:
            raise ValueError(f"Money amount cannot be negative: {self.amount}")
        if normalized == 0:
            # no negative zero
            normalized = normalized.copy_abs()
        object.__setattr__(self, "amount", normalized)

    @classmethod
    def of(cls, value) -> "Money":
        """Build Money from a str, int, float or Decimal.

        Floats are converted through their shortest repr so ``Money.of(5.99)``
        is exactly 5.99 rather than the nearest binary fraction.

        Raises:
            ValueError: If the value is not a number or is negative.
        """
        if isinstance(value, bool):
            raise ValueError("Money amount cannot be a boolean")
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Invalid money amount: {value!r}") from exc
        return cls(amount)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __mul__(self, quantity: int) -> "Money":
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return NotImplemented
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {quantity}")
        return Money(self.amount * quantity)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return str(self.amount)


Money.ZERO = Money(Decimal("0"))


@dataclass(frozen=True)
class OrderId:
    """Opaque, non-blank order identifier."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("OrderId cannot be blank")

    @classmethod
    def generate(cls) -> "OrderId":
        return cls(str(uuid.uuid4()))

    @classmethod
    def of(cls, value: str) -> "OrderId":
        return cls(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrderItem:
    """A single line item in an order.

    Attributes:
        sku: Non-blank stock-keeping unit identifier.
        unit_price: Price of one unit.
        quantity: Strictly positive number of units.

    The subtotal is computed on demand and never stored.
    """

    sku: str
    unit_price: Money
    quantity: int

    def __post_init__(self):
        if not isinstance(self.sku, str) or not self.sku.strip():
            raise ValueError("SKU cannot be blank")
        if not isinstance(self.unit_price, Money):
            raise ValueError(f"Unit price must be Money, got {type(self.unit_price).__name__}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Quantity must be an integer: {self.quantity!r}")
        if self.quantity <= 0:
            raise ValueError(f"Quantity must be positive: {self.quantity}")

    @classmethod
    def of(cls, sku: str, unit_price: Money, quantity: int) -> "OrderItem":
        return cls(sku=sku, unit_price=unit_price, quantity=quantity)

    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


# ---- Enums ----
class OrderStatus(str, Enum):
    """Lifecycle stage of an order.

    ``can_transition_to`` is the only place that decides whether a status
    change is legal. DELIVERED and CANCELLED are terminal.
    """

    NEW = "NEW"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        return target in _TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]


_TRANSITIONS = {
    OrderStatus.NEW: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


# ---- Aggregate ----
@dataclass(frozen=True)
class Order:
    """Aggregate root for a placed order.

    Attributes:
        id: Identifier assigned at creation.
        items: Non-empty tuple of line items, in the order they were given.
        status: Current lifecycle status.

    Use ``Order.create`` for new orders (raises an ``OrderPlaced`` event)
    and ``Order.reconstitute`` to rebuild one that already exists. Status
    changes go through ``transition_to``, which returns a new ``Order`` and
    leaves the receiver untouched.

    Pending events live in an internal buffer until ``pull_domain_events``
    hands them over; a second pull returns an empty list.
    """

    id: OrderId
    items: Tuple[OrderItem, ...]
    status: OrderStatus = OrderStatus.NEW
    _events: List[DomainEvent] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.id, OrderId):
            raise ValueError("Order id must be an OrderId")
        items = tuple(self.items)
        if not items:
            raise ValueError("Order must contain at least one item")
        for item in items:
            if not isinstance(item, OrderItem):
                raise ValueError(f"Order items must be OrderItem instances, got {type(item).__name__}")
        object.__setattr__(self, "items", items)
        object.__setattr__(self, "status", OrderStatus(self.status))

    @classmethod
    def create(cls, items: Iterable[OrderItem]) -> "Order":
        """Create a NEW order with a fresh id and one pending OrderPlaced event.

        Raises:
            ValueError: If ``items`` is empty or holds something other than
                ``OrderItem`` instances.
        """
        order = cls(id=OrderId.generate(), items=tuple(items))
        order._events.append(
            OrderPlaced(
                order_id=order.id,
                total_amount=order.total(),
                item_count=order.item_count(),
            )
        )
        return order

    @classmethod
    def reconstitute(cls, id: OrderId, items: Iterable[OrderItem], status: OrderStatus = OrderStatus.NEW) -> "Order":
        """Rebuild an existing order without raising any event."""
        return cls(id=id, items=tuple(items), status=status)

    def total(self) -> Money:
        total = Money.ZERO
        for item in self.items:
            total = total + item.subtotal()
        return total

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def can_be_modified(self) -> bool:
        return self.status == OrderStatus.NEW

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._events)

    def transition_to(self, target: OrderStatus) -> "Order":
        """Move the order to ``target`` if the status machine allows it.

        Returns:
            A new ``Order`` with ``status == target`` whose event buffer holds
            only one ``OrderStatusChanged``. Events still pending on the
            receiver stay there and are pulled from the receiver.

        Raises:
            InvalidState: When the edge is not legal. The receiver is not
                modified.
        """
        target = OrderStatus(target)
        if not self.status.can_transition_to(target):
            raise InvalidState(
                f"Cannot transition order {self.id.value} from {self.status.value} to {target.value}",
                current_state=self.status.value,
                target_state=target.value,
            )
        updated = replace(self, status=target)
        updated._events.append(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=self.status,
                new_status=target,
            )
        )
        return updated

    def confirm(self) -> "Order":
        return self.transition_to(OrderStatus.CONFIRMED)

    def cancel(self) -> "Order":
        return self.transition_to(OrderStatus.CANCELLED)

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return the pending events and clear the buffer."""
        events = list(self._events)
        self._events.clear()
        return events
