"""Unit tests for the Order aggregate and its domain events."""

from decimal import Decimal

import pytest

from apps.orders.domain import Money, Order, OrderId, OrderItem, OrderStatus
from apps.orders.errors import InvalidState
from apps.orders.events import OrderPlaced, OrderStatusChanged


def _items():
    return [
        OrderItem.of("SKU-001", Money.of("19.99"), 2),
        OrderItem.of("SKU-002", Money.of("9.99"), 1),
    ]


def test_create_starts_new_with_one_order_placed_event():
    order = Order.create(_items())
    assert order.status == OrderStatus.NEW
    assert order.total().amount == Decimal("49.97")
    assert order.item_count() == 3
    events = order.domain_events
    assert len(events) == 1
    placed = events[0]
    assert isinstance(placed, OrderPlaced)
    assert placed.order_id == order.id
    assert placed.total_amount == order.total()
    assert placed.item_count == 3
    assert placed.event_type == "OrderPlaced"


def test_create_without_items_raises():
    with pytest.raises(ValueError):
        Order.create([])


def test_items_keep_declared_order():
    order = Order.create(_items())
    assert [i.sku for i in order.items] == ["SKU-001", "SKU-002"]


def test_reconstitute_raises_no_events():
    order = Order.reconstitute(OrderId.of("o-1"), _items(), OrderStatus.SHIPPED)
    assert order.status == OrderStatus.SHIPPED
    assert order.domain_events == []


def test_pull_domain_events_drains_buffer():
    order = Order.create(_items())
    assert len(order.pull_domain_events()) == 1
    assert order.pull_domain_events() == []


def test_confirm_returns_new_order_and_keeps_receiver():
    order = Order.create(_items())
    confirmed = order.confirm()
    assert confirmed is not order
    assert order.status == OrderStatus.NEW
    assert confirmed.status == OrderStatus.CONFIRMED
    assert confirmed.id == order.id
    assert confirmed.items == order.items


def test_transition_holds_only_the_status_change_event():
    order = Order.create(_items())
    confirmed = order.confirm()
    events = confirmed.pull_domain_events()
    assert [e.event_type for e in events] == ["OrderStatusChanged"]
    changed = events[0]
    assert isinstance(changed, OrderStatusChanged)
    assert changed.previous_status == OrderStatus.NEW
    assert changed.new_status == OrderStatus.CONFIRMED
    assert changed.payload() == {
        "order_id": order.id.value,
        "previous_status": "NEW",
        "new_status": "CONFIRMED",
    }


def test_order_placed_is_pulled_once_across_transitions():
    """The creation event stays on the original value and is never duplicated."""
    order = Order.create(_items())
    confirmed = order.confirm()
    pulled = order.pull_domain_events() + confirmed.pull_domain_events()
    assert [e.event_type for e in pulled] == ["OrderPlaced", "OrderStatusChanged"]


def test_illegal_transition_raises_invalid_state():
    order = Order.reconstitute(OrderId.of("o-2"), _items(), OrderStatus.DELIVERED)
    with pytest.raises(InvalidState) as e:
        order.cancel()
    assert e.value.code == "INVALID_STATE"
    assert e.value.current_state == "DELIVERED"
    assert e.value.target_state == "CANCELLED"
    assert order.status == OrderStatus.DELIVERED


def test_full_lifecycle():
    order = Order.create(_items()).confirm()
    for target in (OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.DELIVERED):
        order = order.transition_to(target)
    assert order.status.is_terminal
    events = order.pull_domain_events()
    assert len(events) == 1
    assert events[0].new_status == OrderStatus.DELIVERED


def test_only_new_orders_can_be_modified():
    order = Order.create(_items())
    assert order.can_be_modified()
    assert not order.confirm().can_be_modified()


def test_event_ids_are_unique():
    a = Order.create(_items()).domain_events[0]
    b = Order.create(_items()).domain_events[0]
    assert a.event_id != b.event_id
    assert a.occurred_at.tzinfo is not None
