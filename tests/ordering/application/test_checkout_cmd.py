"""Application tests for checking out a cart into an order."""

from decimal import Decimal

import pytest
from ordering.cart.cart import Cart
from ordering.cart.items import AddToCart, RemoveCartItem
from ordering.checkout.checkout import CheckoutCart
from ordering.customer.registration import RegisterCustomer, RegisterUser
from ordering.order.order import Order, OrderStatus, PaymentStatus
from ordering.product.management import AddProduct, ChangeProductPrice, DeactivateProduct
from ordering.shared.money import Money
from protean import current_domain
from protean.exceptions import ValidationError


def _customer(**address):
    user_id = current_domain.process(
        RegisterUser(username="alice", email="alice@example.com", password="pw"),
        asynchronous=False,
    )
    return current_domain.process(RegisterCustomer(user_id=user_id, name="Alice", **address), asynchronous=False)


def _product(unit_price="100", name="Desk Lamp"):
    return current_domain.process(
        AddProduct(name=name, product_type="Lighting", unit_price=unit_price),
        asynchronous=False,
    )


def _add(customer_id, product_id, quantity=1):
    return current_domain.process(
        AddToCart(customer_id=customer_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _checkout(cart_id, **kwargs):
    return current_domain.process(CheckoutCart(cart_id=cart_id, **kwargs), asynchronous=False)


class TestCheckout:
    def test_checkout_places_order(self):
        customer_id = _customer()
        _add(customer_id, _product("100"), 2)
        cart_id = _add(customer_id, _product("45.50", name="Chair"), 1)

        order_id = _checkout(cart_id, payment_method="Online", notes="Leave at the door")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.customer_id == customer_id
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.UNPAID.value
        assert order.payment_method == "Online"
        assert order.notes == "Leave at the door"
        assert len(order.items) == 2
        assert order.total_amount.as_decimal() == Decimal("245.50")

    def test_cart_is_discarded(self):
        customer_id = _customer()
        cart_id = _add(customer_id, _product())
        _checkout(cart_id)
        assert current_domain.repository_for(Cart).find_by_id(cart_id) is None

    def test_new_cart_after_checkout(self):
        customer_id = _customer()
        product_id = _product()
        first_cart = _add(customer_id, product_id)
        _checkout(first_cart)
        second_cart = _add(customer_id, product_id)
        assert second_cart != first_cart

    def test_shipping_address_defaults_to_customer_address(self):
        customer_id = _customer(address="1 Main St", city="Springfield", postal_code="00000")
        cart_id = _add(customer_id, _product())
        order = current_domain.repository_for(Order).get(_checkout(cart_id))
        assert order.shipping_address == "1 Main St, Springfield 00000"

    def test_explicit_shipping_address_wins(self):
        customer_id = _customer(address="1 Main St", city="Springfield")
        cart_id = _add(customer_id, _product())
        order = current_domain.repository_for(Order).get(_checkout(cart_id, shipping_address="PO Box 7"))
        assert order.shipping_address == "PO Box 7"

    def test_order_uses_price_at_checkout(self):
        customer_id = _customer()
        product_id = _product("100")
        cart_id = _add(customer_id, product_id, 2)
        current_domain.process(ChangeProductPrice(product_id=product_id, new_price="120"), asynchronous=False)

        order = current_domain.repository_for(Order).get(_checkout(cart_id))
        assert order.items[0].unit_price == "120.00"
        assert order.total_amount == Money(amount="240.00")

    def test_order_keeps_price_after_later_change(self):
        customer_id = _customer()
        product_id = _product("100")
        cart_id = _add(customer_id, product_id, 2)
        order_id = _checkout(cart_id)

        current_domain.process(ChangeProductPrice(product_id=product_id, new_price="500"), asynchronous=False)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].unit_price == "100.00"
        assert order.items[0].subtotal == "200.00"
        assert order.total_amount == Money(amount="200.00")


class TestCheckoutRejections:
    def test_empty_cart_rejected(self):
        customer_id = _customer()
        cart_id = _add(customer_id, _product())
        cart = current_domain.repository_for(Cart).get(cart_id)
        current_domain.process(RemoveCartItem(cart_id=cart_id, item_id=str(cart.items[0].id)), asynchronous=False)

        with pytest.raises(ValidationError):
            _checkout(cart_id)

    def test_unavailable_product_rejected(self):
        customer_id = _customer()
        product_id = _product()
        cart_id = _add(customer_id, product_id)
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ValidationError):
            _checkout(cart_id)

        # Nothing was placed and the cart survives
        assert current_domain.repository_for(Order).find_by_customer(customer_id) == []
        assert current_domain.repository_for(Cart).find_by_id(cart_id) is not None

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError):
            CheckoutCart(cart_id="cart-001", payment_method="Barter")
