"""Unit tests for OrderItem and OrderId."""

from decimal import Decimal

import pytest

from apps.orders.domain import Money, OrderId, OrderItem


def test_subtotal_is_price_times_quantity():
    item = OrderItem.of("SKU-001", Money.of("19.99"), 2)
    assert item.subtotal().amount == Decimal("39.98")


@pytest.mark.parametrize("sku", ["", "   "])
def test_blank_sku_is_rejected(sku):
    with pytest.raises(ValueError):
        OrderItem(sku, Money.of("1.00"), 1)


@pytest.mark.parametrize("quantity", [0, -1, True, 1.5])
def test_quantity_must_be_a_positive_int(quantity):
    with pytest.raises(ValueError):
        OrderItem("SKU-001", Money.of("1.00"), quantity)


def test_unit_price_must_be_money():
    with pytest.raises(ValueError):
        OrderItem("SKU-001", Decimal("1.00"), 1)


def test_zero_price_is_allowed():
    assert OrderItem("FREEBIE", Money.ZERO, 4).subtotal() == Money.ZERO


def test_order_ids_are_unique_and_non_blank():
    a, b = OrderId.generate(), OrderId.generate()
    assert a != b
    assert str(a) == a.value
    assert OrderId.of("abc") == OrderId("abc")
    with pytest.raises(ValueError):
        OrderId.of("  ")
