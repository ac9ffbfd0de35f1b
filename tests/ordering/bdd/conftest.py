"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from ordering.cart.cart import CartItem
from ordering.order.order import Order, OrderItem
from ordering.product.product import Product
from ordering.shared.money import Money
from pytest_bdd import given, parsers, then


@pytest.fixture()
def outcome():
    """Container for the Outcome of the last line-item operation."""
    return {"value": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product priced at "{price}"'), target_fixture="product")
def product_priced_at(price):
    return Product.create(name="Desk Lamp", product_type="Lighting", unit_price=price)


@given(parsers.cfparse("a cart line for {quantity:d} units of the product"), target_fixture="item")
def cart_line(product, quantity):
    return CartItem.for_product(product, quantity)


@given(parsers.cfparse("an order line for {quantity:d} units of the product"), target_fixture="item")
def order_line(product, quantity):
    return OrderItem.snapshot(product, quantity)


@given(parsers.cfparse('an order in "{status}" state'), target_fixture="order")
def order_in_state(status):
    return Order(
        order_no="ORD-20240101000000-BDD001",
        customer_id="cust-001",
        total_amount=Money(amount="59.00"),
        status=status,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the line quantity is {quantity:d}"))
def line_quantity_is(item, quantity):
    assert item.quantity == quantity


@then(parsers.cfparse('the line unit price is "{price}"'))
def line_unit_price_is(item, price):
    assert Decimal(item.unit_price) == Decimal(price)


@then(parsers.cfparse('the line subtotal is "{subtotal}"'))
def line_subtotal_is(item, subtotal):
    assert Decimal(item.subtotal) == Decimal(subtotal)


@then("the change is rejected")
def change_rejected(outcome):
    assert not outcome["value"]


@then("the change is applied")
def change_applied(outcome):
    assert outcome["value"]


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(order, status):
    assert order.payment_status == status
