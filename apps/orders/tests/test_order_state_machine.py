"""Tests for the OrderStatus transition table."""

import pytest

from apps.orders.domain import Money, Order, OrderId, OrderItem
from apps.orders.domain import OrderStatus as S
from apps.orders.errors import InvalidState
from apps.orders.events import OrderStatusChanged

LEGAL = {
    (S.NEW, S.CONFIRMED),
    (S.NEW, S.CANCELLED),
    (S.CONFIRMED, S.PROCESSING),
    (S.CONFIRMED, S.CANCELLED),
    (S.PROCESSING, S.SHIPPED),
    (S.PROCESSING, S.CANCELLED),
    (S.SHIPPED, S.DELIVERED),
}

ALL_PAIRS = [(a, b) for a in S for b in S]


@pytest.mark.parametrize("current,target", ALL_PAIRS)
def test_can_transition_to_matches_table(current, target):
    assert current.can_transition_to(target) == ((current, target) in LEGAL)


def test_no_self_transitions():
    assert not any(s.can_transition_to(s) for s in S)


def test_terminal_states():
    assert {s for s in S if s.is_terminal} == {S.DELIVERED, S.CANCELLED}


def test_shipped_orders_cannot_be_cancelled():
    assert not S.SHIPPED.can_transition_to(S.CANCELLED)


def _order_in(status):
    return Order.reconstitute(OrderId.of("o-1"), [OrderItem.of("SKU-001", Money.of("1.00"), 1)], status)


@pytest.mark.parametrize("current,target", [p for p in ALL_PAIRS if p not in LEGAL])
def test_illegal_transition_on_order_raises_and_keeps_status(current, target):
    order = _order_in(current)
    with pytest.raises(InvalidState) as e:
        order.transition_to(target)
    assert e.value.current_state == current.value
    assert e.value.target_state == target.value
    assert order.status == current
    assert order.domain_events == []


@pytest.mark.parametrize("current,target", sorted(LEGAL))
def test_legal_transition_on_order_raises_one_status_change(current, target):
    order = _order_in(current)
    moved = order.transition_to(target)
    assert moved.status == target
    assert order.status == current
    events = moved.pull_domain_events()
    assert len(events) == 1
    assert isinstance(events[0], OrderStatusChanged)
    assert events[0].previous_status == current
    assert events[0].new_status == target
