"""Domain events raised by the order aggregate.

Events are immutable facts named in the past tense. Each one carries a
unique ``event_id``, the moment it ``occurred_at`` (UTC) and an
``event_type`` tag used by publishers for routing and logging.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .domain import Money, OrderId, OrderStatus


def _new_event_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base type for all domain events."""

    event_type: ClassVar[str] = "DomainEvent"

    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_utcnow)

    def payload(self) -> dict:
        """Event-specific fields as primitives, for logs and transports."""
        return {}


@dataclass(frozen=True, kw_only=True)
class OrderPlaced(DomainEvent):
    """An order was created.

    Attributes:
        order_id: Identifier of the new order.
        total_amount: Order total at creation time.
        item_count: Sum of quantities across all line items.
    """

    event_type: ClassVar[str] = "OrderPlaced"

    order_id: "OrderId"
    total_amount: "Money"
    item_count: int

    def payload(self) -> dict:
        return {
            "order_id": str(self.order_id),
            "total_amount": str(self.total_amount),
            "item_count": self.item_count,
        }


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """An order moved from one lifecycle status to another."""

    event_type: ClassVar[str] = "OrderStatusChanged"

    order_id: "OrderId"
    previous_status: "OrderStatus"
    new_status: "OrderStatus"

    def payload(self) -> dict:
        return {
            "order_id": str(self.order_id),
            "previous_status": self.previous_status.value,
            "new_status": self.new_status.value,
        }
