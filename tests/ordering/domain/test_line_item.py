"""Tests for the line-item engine shared by cart and order lines.

Every change to quantity or price must leave subtotal == unit_price * quantity.
"""

from decimal import Decimal

import pytest
from ordering.cart.cart import CartItem
from ordering.order.order import OrderItem
from ordering.shared import line_item
from ordering.shared.line_item import PricePolicy


def _cart_item(quantity=5, unit_price="100"):
    item = CartItem(product_id="prod-001", quantity=quantity, unit_price=unit_price)
    item.calculate_subtotal()
    return item


def _order_item(quantity=5, unit_price="100"):
    item = OrderItem(product_id="prod-001", quantity=quantity, unit_price=unit_price)
    item.calculate_subtotal()
    return item


@pytest.fixture(params=["cart", "order"])
def item(request):
    return _cart_item() if request.param == "cart" else _order_item()


class TestSubtotal:
    @pytest.mark.parametrize(
        "unit_price, quantity, expected",
        [
            ("100", 3, "300.00"),
            ("0.10", 3, "0.30"),
            ("19.99", 7, "139.93"),
            ("0", 4, "0.00"),
        ],
    )
    def test_subtotal_is_exact_product(self, unit_price, quantity, expected):
        for build in (_cart_item, _order_item):
            built = build(quantity=quantity, unit_price=unit_price)
            assert Decimal(built.subtotal) == Decimal(expected)

    def test_calculate_is_idempotent(self, item):
        item.calculate_subtotal()
        first = item.subtotal
        item.calculate_subtotal()
        assert item.subtotal == first

    def test_no_price_leaves_subtotal_unset(self):
        item = CartItem(product_id="prod-001", quantity=2)
        outcome = item.calculate_subtotal()
        assert not outcome
        assert item.subtotal is None

    def test_zero_quantity_does_not_recalculate(self, item):
        item.set_quantity(0)
        item.subtotal = "500.00"
        outcome = item.calculate_subtotal()
        assert not outcome
        assert item.subtotal == "500.00"


class TestSetQuantity:
    def test_recomputes_subtotal(self, item):
        item.set_quantity(7)
        assert item.quantity == 7
        assert Decimal(item.subtotal) == Decimal("700")

    def test_without_price_only_assigns(self):
        item = CartItem(product_id="prod-001", quantity=1)
        item.set_quantity(4)
        assert item.quantity == 4
        assert item.subtotal is None


class TestIncreaseQuantity:
    def test_adds_exactly_delta(self, item):
        outcome = item.increase_quantity(2)
        assert outcome
        assert item.quantity == 7
        assert Decimal(item.subtotal) == Decimal("700")

    @pytest.mark.parametrize("delta", [0, -1, -10, None])
    def test_non_positive_delta_is_noop(self, item, delta):
        outcome = item.increase_quantity(delta)
        assert not outcome
        assert item.quantity == 5
        assert Decimal(item.subtotal) == Decimal("500")


class TestDecreaseQuantity:
    def test_decrease_below_current(self, item):
        outcome = item.decrease_quantity(3)
        assert outcome
        assert item.quantity == 2
        assert Decimal(item.subtotal) == Decimal("200")

    @pytest.mark.parametrize("delta", [5, 6, 0, -1, None])
    def test_decrease_to_zero_or_invalid_is_noop(self, item, delta):
        outcome = item.decrease_quantity(delta)
        assert not outcome
        assert outcome.reason
        assert item.quantity == 5
        assert Decimal(item.subtotal) == Decimal("500")


class TestPricePolicy:
    def test_update_price_rejected_under_snapshot(self):
        item = _order_item(quantity=2, unit_price="100")
        outcome = line_item.update_price(item, "500", PricePolicy.SNAPSHOT)
        assert not outcome
        assert item.unit_price == "100"

    def test_snapshot_price_cannot_be_replaced(self):
        item = _order_item(quantity=2, unit_price="100")
        outcome = item.set_unit_price("500")
        assert not outcome
        assert Decimal(item.unit_price) == Decimal("100")
        assert Decimal(item.subtotal) == Decimal("200")

    def test_snapshot_price_can_be_captured_once(self):
        item = OrderItem(product_id="prod-001", quantity=2)
        assert item.set_unit_price("12.5")
        assert item.unit_price == "12.50"
        assert item.subtotal == "25.00"

    def test_live_price_can_be_replaced(self):
        item = _cart_item(quantity=2, unit_price="100")
        assert item.set_unit_price("80")
        assert item.subtotal == "160.00"
